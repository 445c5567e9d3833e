"""Hospital management database: schema models, migrations support and data access."""
