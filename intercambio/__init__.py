"""Medication exchange application.

Hospitals donate and publish medication, ship donations to each other
and follow the exchange through notifications, notices and dashboard
metrics.  This package holds the models, services, serializers and
views behind the ``/api/`` contract used by the front-end.
"""
