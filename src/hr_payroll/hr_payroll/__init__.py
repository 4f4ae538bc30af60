"""HR payroll engine.

Feature modules (payroll, leaves, attendance, settings, ledger) each carry a
model, a repository protocol with its MySQL implementation, a service and a
thin Flask JSON controller.
"""
