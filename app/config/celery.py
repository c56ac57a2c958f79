"""
Celery configuration for the Django application.

Celery runs work that must not block a request, such as removing a deleted
post's objects from the object store.

Redis is the message broker and result backend. Tasks are auto-discovered
from the ``tasks.py`` module of every installed app.

Usage:
    from media.tasks import delete_stored_objects

    delete_stored_objects.delay(post.stored_keys)

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

# Set the default Django settings module for the Celery worker
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()
