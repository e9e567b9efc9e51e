"""
Rooms module - Classrooms and other spaces used by subject schedules.
"""
