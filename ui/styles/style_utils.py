# ui/styles/style_utils.py
from PySide6.QtWidgets import QAbstractItemView, QHeaderView
from PySide6.QtCore import Qt


def style_table(table: QAbstractItemView, *, editable: bool = False):
    """
    Shared table behavior for the FL list and the wizard grids.
    Editable grids host cell widgets, so they keep the grid lines and
    get taller rows; read-only lists select whole rows.
    """
    table.setAlternatingRowColors(not editable)
    table.setShowGrid(editable)
    table.setWordWrap(False)
    table.setSelectionMode(QAbstractItemView.SingleSelection)
    table.setSelectionBehavior(QAbstractItemView.SelectItems if editable else QAbstractItemView.SelectRows)
    # values are edited through cell widgets only
    table.setEditTriggers(QAbstractItemView.NoEditTriggers)

    vh = table.verticalHeader()
    vh.setVisible(editable)
    vh.setDefaultSectionSize(table.fontMetrics().height() + (18 if editable else 8))

    hh = table.horizontalHeader()
    hh.setSectionResizeMode(QHeaderView.Stretch)
    hh.setHighlightSections(False)
    hh.setDefaultAlignment(Qt.AlignLeft | Qt.AlignVCenter)
