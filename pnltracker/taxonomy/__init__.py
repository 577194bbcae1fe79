"""Mini README: Expense taxonomy package.

``structure`` holds the plain value types (``ExpenseStructure`` and
``ItemTemplate``) and the starter structure; ``editor`` provides
``ExpenseTaxonomy``, the validated working-copy editor used by the settings
screen and by one-off item additions during record entry.
"""

from .editor import ExpenseTaxonomy
from .structure import ExpenseStructure, ItemTemplate, default_structure

__all__ = ["ExpenseStructure", "ExpenseTaxonomy", "ItemTemplate", "default_structure"]
