"""
Root pytest configuration for the Django project.

Points pytest-django at the project settings. Fixtures live in
app/conftest.py and in each app's tests/conftest.py.
"""

import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
