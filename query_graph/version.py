"""Version information."""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)

# Version history
CHANGELOG = """
# Changelog

## v1.0.0

**Join graph extraction**

- Comment masking with offset preservation
- WITH clause splitting into CTE scopes
- FROM / JOIN table references with alias resolution
- Equality join conditions between aliases
- Character offsets for every located node

**CLI**

- pretty / table / json / dot output
- Inline highlight of located identifiers
- Multi-statement files analyzed statement by statement

### Known Limitations

- Subqueries in FROM are not reported as their own nodes
- Comma-separated FROM lists only register the first table
"""
