"""RFID attendance package.

Feature modules (teachers, schedules, attendance, notifications, ...) follow a
thin Flask controller layer over service/repository layers.
"""
