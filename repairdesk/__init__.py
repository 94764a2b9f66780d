"""RepairDesk - electronics repair shop back end"""
