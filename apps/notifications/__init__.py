"""Notifications app package.

Email delivery for account and booking events. Sending happens in Celery
tasks (see ``tasks.py``) so request handlers never wait on SMTP.
"""
