import logging
from typing import Any, Callable, Dict, List, Optional

from .errors import ExecutionError, TransactionError
from .schema import Plan
from .space import Space
from .tools import TOOLS

log = logging.getLogger(__name__)

ToolFn = Callable[[Any, Space], Dict[str, Any]]


class Executor:
    """
    Applies a Plan to a Space, action by action.

    - All actions run inside one Space transaction: either every change is
      kept or none is.
    - Soft problems (missing block, nothing to change) come back from the tool
      as ``reason`` and are only logged.
    - Any exception raised by a tool aborts the plan, rolls the space back and
      is re-raised as ExecutionError naming the action.
    - Per-action history in self.history
    """

    def __init__(
        self,
        reporter=print,
        tools: Optional[Dict[str, ToolFn]] = None,
    ):
        self.report = reporter
        self.tools = TOOLS if tools is None else tools
        self.history: List[Dict[str, Any]] = []

    # ------------------------------
    # Public
    # ------------------------------

    def run(self, plan: Plan, space: Space) -> bool:
        """Execute the plan. Raises ExecutionError after rolling back."""
        self.history = []
        total = len(plan.actions)
        self.report(f"🚀 Executing plan: {total} action(s)")

        try:
            space.begin()
        except TransactionError as e:
            raise ExecutionError(f"Cannot start transaction: {e}") from e

        try:
            for idx, action in enumerate(plan.actions):
                result = self._run_step(idx, total, action, space)
                self.history.append({"action": action.action, "ok": True, "result": result})
        except BaseException:
            space.rollback()
            self.report("↩ Plan rolled back, drawing unchanged")
            raise

        space.commit()
        self.report("✅ Plan executed")
        return True

    # ------------------------------
    # Internals
    # ------------------------------

    def _run_step(self, idx: int, total: int, action, space: Space) -> Dict[str, Any]:
        kind = action.action
        self.report(f" [{idx + 1}/{total}] {kind}")
        fn = self.tools.get(kind)
        if fn is None:
            raise ExecutionError(f"unknown action {kind}", index=idx, action=kind)

        try:
            res = fn(action, space)
        except ExecutionError:
            raise
        except Exception as e:
            self.history.append({"action": kind, "ok": False, "error": str(e)})
            raise ExecutionError(
                f"action {idx + 1} ({kind}) failed: {e}", index=idx, action=kind
            ) from e

        if not (isinstance(res, dict) and res.get("ok")):
            raise ExecutionError(f"action {idx + 1} ({kind}) returned {res}", index=idx, action=kind)

        if res.get("reason"):
            log.debug("action %d (%s) skipped: %s", idx + 1, kind, res["reason"])
        self.report(f"  → ok {self._summary(res)}")
        return res

    @staticmethod
    def _summary(res: Dict[str, Any]) -> str:
        if "created" in res:
            return f"(created {res['created']})"
        if "affected" in res:
            return f"(affected {res['affected']})"
        return ""
