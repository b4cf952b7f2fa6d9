"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories send parameterized SQL through `db.connection.execute` and
return plain rows or domain model objects.
"""
