""" Notify tabs when financial lines, purchase orders or projects change """
from PySide6.QtCore import QObject, Signal


class DomainEvents(QObject):
    project_changed = Signal(str)           # project_id
    purchase_orders_changed = Signal(str)   # project_id
    financial_lines_changed = Signal(str)   # project_id


# SINGLE global instance
domain_events = DomainEvents()
