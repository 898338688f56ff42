"""
Точка входа `python -m shellect` и консольной команды `shellect`.
"""

from shellect.flows.launch_flow import run_launch_flow
from shellect.shared.decorators import safe_entry


@safe_entry
def main() -> None:
    """
    Запуск лаунчера оболочек
    """
    run_launch_flow()


if __name__ == "__main__":
    main()
