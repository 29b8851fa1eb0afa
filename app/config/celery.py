"""
Celery configuration for the Django application.

Celery runs work that must not block a request:
- Web Push delivery to every subscription of a message's recipients

Redis is both the message broker and result backend. Tasks are
auto-discovered from all installed Django apps. For local development
without Redis set CELERY_TASK_ALWAYS_EAGER=True to run tasks inline.

Usage:
    # Define a task in any app's tasks.py:
    from celery import shared_task

    @shared_task
    def send_push_to_users(user_ids, payload):
        ...

    # Call the task asynchronously:
    send_push_to_users.delay([str(user.id)], {"title": "..."})

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

# Look for a tasks.py module in each installed app
app.autodiscover_tasks()
