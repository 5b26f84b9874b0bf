"""
Result formatting utilities for schema conversion.
Handles creation of standardized result dictionaries returned to API callers.
"""
from typing import Any, Dict, List, Optional

from ..models import SkippedStatement, TableDefinition


def create_result_dictionary(status: str, message: str, target_dialect: Optional[str], output: str,
                             tables: List[TableDefinition], skipped: List[SkippedStatement], **kwargs) -> dict:
    """
    Create standardized result dictionary for conversion operations.

    Args:
        status: Overall conversion status ('success', 'partial_success', 'empty')
        message: Human-readable status message
        target_dialect: Canonical target dialect, or None for parse-only results
        output: Converted SQL script ('' for parse-only results)
        tables: Tables that parsed successfully, in script order
        skipped: Statements that did not yield a table
        **kwargs: Additional keys copied into the result

    Returns:
        Standardized result dictionary with stats and JSON-ready table/skip lists
    """
    result: Dict[str, Any] = {
        "status": status,
        "message": message,
        "target_dialect": target_dialect,
        "output": output,
        "stats": {
            "tables_converted": len(tables),
            "columns_converted": sum(len(t.columns) for t in tables),
            "statements_skipped": len(skipped),
        },
        "tables": [t.to_dict() for t in tables],
        "skipped": [s.to_dict() for s in skipped],
    }
    result.update(kwargs)
    return result


def result_status(tables: List[TableDefinition], skipped: List[SkippedStatement]) -> str:
    if not tables:
        return "empty"
    return "partial_success" if skipped else "success"
