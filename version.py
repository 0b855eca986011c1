"""
Version information for the School Portal
"""

__version__ = "1.0.0"
__version_info__ = tuple(map(int, __version__.split('.')))

# Version metadata
VERSION_MAJOR = __version_info__[0]
VERSION_MINOR = __version_info__[1]
VERSION_PATCH = __version_info__[2]

# Application metadata
APP_NAME = "School Portal"
APP_DESCRIPTION = "Role-scoped school management lists and forms for admins, teachers, students and parents"
