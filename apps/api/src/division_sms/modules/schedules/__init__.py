"""
Schedules module - Weekly subject schedules with room/teacher/section conflict detection.
"""
