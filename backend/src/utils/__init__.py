"""
Utility modules for the clinic backend.

This package contains shared helpers used across the application: clinic
timezone handling and the database query helpers for users, sessions,
patients, appointments, medical records and clinic settings.
"""
