from typing import Optional

from ..utils.dialect_utils import resolve_dialect


class BaseConverter:
    """
    A base class for all converters to ensure a consistent interface.

    ``target_dialect`` may be omitted by converters that only parse.
    """
    def __init__(self, target_dialect: Optional[str] = None):
        self.target_dialect = resolve_dialect(target_dialect) if target_dialect is not None else None

    def convert_statement(self, statement: str):
        """
        The main conversion method that each converter must implement.

        Args:
            statement (str): A single SQL statement to convert.
        """
        raise NotImplementedError("Each converter must implement its own convert_statement method.")
