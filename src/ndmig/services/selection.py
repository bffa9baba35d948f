"""Operator-facing menus: operation choice and instance selection."""

from typing import Callable, Dict, Mapping, Optional, Tuple

from rich.markup import escape
from rich.prompt import Prompt

from ndmig.constants import DB_ROLE_SUFFIX
from ndmig.errors import InstanceNotFoundError, InvalidOperationError
from ndmig.errors_catalog import actionable_error


class SelectionService:
    """Resolves operator input to an operation and to exactly one instance."""

    OPERATIONS = {
        "1": "export",
        "2": "import",
        "export": "export",
        "import": "import",
    }

    def __init__(
        self,
        console,
        role_suffix: str = DB_ROLE_SUFFIX,
        prompt: Optional[Callable[..., str]] = None,
    ):
        self.console = console
        self.role_suffix = role_suffix
        self.prompt = prompt or Prompt.ask

    def _ask(self, label: str) -> str:
        try:
            return self.prompt(f"\n[bold white]{label}[/bold white]", console=self.console)
        except EOFError:
            return ""

    def instance_label(self, key: str) -> str:
        """`acme-postgres-db-1` -> `acme`."""
        suffix = f"-{self.role_suffix}"
        if key.endswith(suffix):
            return key[: -len(suffix)]
        return key

    def instance_key(self, choice: str) -> str:
        choice = choice.strip()
        if choice.endswith(self.role_suffix):
            return choice
        return f"{choice}-{self.role_suffix}"

    def choose_operation(self, choice: Optional[str] = None) -> str:
        if choice is None:
            self.console.print("  1. Export")
            self.console.print("  2. Import")
            choice = self._ask("Operation")

        operation = self.OPERATIONS.get(choice.strip().lower())
        if operation is None:
            raise InvalidOperationError(actionable_error("invalid_operation", operation=choice.strip()))
        return operation

    def show_instances(self, instances: Mapping[str, str]):
        self.console.print("\n[bold yellow]Detected Ballsdex instances:[/bold yellow]")
        if not instances:
            self.console.print("  [dim](none)[/dim]")
        for key in sorted(instances):
            self.console.print(
                f"  [bright_yellow]›[/bright_yellow] [bright_cyan]{escape(self.instance_label(key))}[/bright_cyan]"
            )

    def resolve_instance(self, instances: Dict[str, str], choice: str) -> Tuple[str, str]:
        """Returns (instance key, container id). Unknown choices never fall back to a default."""
        key = self.instance_key(choice)
        if key not in instances:
            raise InstanceNotFoundError(actionable_error("instance_not_found", instance=key))
        return key, instances[key]

    def choose_instance(self, instances: Dict[str, str], choice: Optional[str] = None) -> Tuple[str, str]:
        if choice is None:
            self.show_instances(instances)
            choice = self._ask("Select instance")
        return self.resolve_instance(instances, choice)
