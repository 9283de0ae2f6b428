"""Draft/applied state machine behind the logic filter editor."""

import logging
from typing import Any, Callable

from evalfilter.catalog import FieldCatalog
from evalfilter.expr.model import Expr, LogicFilter

logger = logging.getLogger(__name__)

ChangeListener = Callable[[LogicFilter], None]


class LogicFilterEditor:
    """
    Holds a draft logic filter separately from the applied one.

    Edits only touch the draft. ``commit`` prunes incomplete expressions and
    swaps the result in as the applied value; ``discard`` throws the draft
    away; ``clear`` empties both at once.
    """

    def __init__(
        self,
        catalog: FieldCatalog,
        applied: LogicFilter | None = None,
        on_change: ChangeListener | None = None,
    ):
        """
        Initialize the editor.

        Args:
            catalog: Fields available on the left side
            applied: Initial applied value (defaults to an empty group)
            on_change: Called with the new applied value on commit and clear
        """
        self.catalog = catalog
        self.on_change = on_change
        self._applied = applied.model_copy(deep=True) if applied else LogicFilter()
        self._draft = self._applied.model_copy(deep=True)

    @property
    def draft(self) -> LogicFilter:
        """The value being edited."""
        return self._draft

    @property
    def applied(self) -> LogicFilter:
        """Copy of the last committed value."""
        return self._applied.model_copy(deep=True)

    @property
    def is_dirty(self) -> bool:
        return self._draft != self._applied

    def reset_applied(self, applied: LogicFilter | None) -> None:
        """Replace the applied value from outside and reseed the draft from it."""
        self._applied = applied.model_copy(deep=True) if applied else LogicFilter()
        self._draft = self._applied.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Draft edits
    # ------------------------------------------------------------------

    def add_expr(self, left: str | None = None) -> int:
        """
        Append an expression to the draft.

        Args:
            left: Optional field to preselect

        Returns:
            Index of the new expression
        """
        self._draft.exprs.append(Expr())
        index = len(self._draft.exprs) - 1
        if left is not None:
            self.change_field(index, left)
        return index

    def remove_expr(self, index: int) -> None:
        """Delete an expression from the draft."""
        del self._draft.exprs[index]

    def change_field(self, index: int, field_name: str) -> Expr:
        """
        Select a new field for an expression.

        The operator is kept if the new field supports it, otherwise the
        field's first operator is chosen. The value is always cleared.

        Raises:
            IndexError: If there is no expression at ``index``
            KeyError: If the field is not in the catalog
        """
        expr = self._draft.exprs[index]
        field = self.catalog[field_name]
        operator_ids = field.operator_ids

        expr.left = field.name
        if expr.operator not in operator_ids:
            expr.operator = operator_ids[0] if operator_ids else None
        expr.right = None
        return expr

    def change_operator(self, index: int, operator: str | None) -> Expr:
        """Set an expression's operator, leaving its value untouched."""
        expr = self._draft.exprs[index]
        expr.operator = operator
        return expr

    def change_value(self, index: int, value: Any) -> Expr:
        """Set an expression's right-hand value."""
        expr = self._draft.exprs[index]
        expr.right = value
        return expr

    # ------------------------------------------------------------------
    # Transitions between draft and applied
    # ------------------------------------------------------------------

    def commit(self) -> LogicFilter:
        """
        Apply the draft.

        Incomplete expressions are dropped. The pruned value becomes both the
        applied value and the new draft.

        Returns:
            The new applied value
        """
        pruned = self._draft.completed()
        dropped = len(self._draft.exprs) - len(pruned.exprs)
        if dropped:
            logger.debug(f"Dropped {dropped} incomplete expression(s) on apply")

        self._applied = pruned
        self._draft = pruned.model_copy(deep=True)
        logger.info(f"Applied logic filter with {len(pruned.exprs)} expression(s)")
        self._notify()
        return self.applied

    def discard(self) -> LogicFilter:
        """Abandon draft edits and restore the applied value into the draft."""
        self._draft = self._applied.model_copy(deep=True)
        return self._draft

    def clear(self) -> LogicFilter:
        """Empty the draft and apply immediately."""
        self._draft = LogicFilter(logic_operator=self._draft.logic_operator)
        self._applied = self._draft.model_copy(deep=True)
        self._notify()
        return self.applied

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.applied)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(draft={len(self._draft.exprs)}, "
            f"applied={len(self._applied.exprs)})"
        )
