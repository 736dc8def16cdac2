"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific table or
database routine. Repositories receive raw rows from the database and
return domain model objects.
"""
