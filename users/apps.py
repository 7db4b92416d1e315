"""
users/apps.py — App configuration for the "users" app

Purpose
===============================================================================
Register the app with Django so its auth views, the optional JWT
authentication class and the `seed_demo` management command are discovered.

Key Points
- The app defines no models: accounts are Django's built-in auth users, and
  JWT blacklisting lives in SimpleJWT's token_blacklist app.
- name: Must match the dotted path used in INSTALLED_APPS ("users").
"""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'users'
