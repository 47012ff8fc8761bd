"""Database utilities: reference data and seeding"""
