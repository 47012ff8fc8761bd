"""Status workflows for volunteers, incidents, assignments and training sessions"""
