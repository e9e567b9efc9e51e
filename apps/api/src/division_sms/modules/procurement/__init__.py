"""
Procurement module - Purchase orders and their printable documents.
"""
