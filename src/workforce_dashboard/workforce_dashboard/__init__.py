"""Construction workforce dashboard package.

Organized by feature modules (users, workers, attendance, payroll, logistics)
with a thin Flask controller layer on top of service/repository layers.
"""
