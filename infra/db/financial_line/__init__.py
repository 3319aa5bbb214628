from infra.db.financial_line.mapper import financial_line_from_orm, financial_line_to_orm
from infra.db.financial_line.repository import SqlAlchemyFinancialLineRepository

__all__ = [
    "financial_line_to_orm",
    "financial_line_from_orm",
    "SqlAlchemyFinancialLineRepository",
]
