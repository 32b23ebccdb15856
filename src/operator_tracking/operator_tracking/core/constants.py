"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_API_PORT = 5001
DEFAULT_MAX_IMPORT_BYTES = 2 * 1024 * 1024
DEFAULT_ATTENDANCE_LIMIT = 500
DEFAULT_PERFORMANCE_LIMIT = 200

MAX_EFFICIENCY_PERCENTAGE = 999.99

IMPORT_COLUMNS = ("name", "email", "employee_id", "department_name", "skill_level")
