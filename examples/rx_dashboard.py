"""
Live terminal view of an Rx subject, rendered with rich.

Run with: python examples/rx_dashboard.py
"""

import time

from rich.console import Console
from rich.table import Table
from rx.subject import Subject

from snapfold import ConnectionPhase, SnapshotBuilder

console = Console()

PHASE_STYLES = {
    ConnectionPhase.NONE: "dim",
    ConnectionPhase.WAITING: "yellow",
    ConnectionPhase.ACTIVE: "green",
    ConnectionPhase.DONE: "cyan",
}


def render(snapshot):
    table = Table(title="Sensor feed", show_header=True, header_style="bold")
    table.add_column("Phase")
    table.add_column("Data")
    table.add_column("Error")

    phase = snapshot.phase
    table.add_row(
        f"[{PHASE_STYLES[phase]}]{phase.value}[/{PHASE_STYLES[phase]}]",
        repr(snapshot.data) if snapshot.has_data else "-",
        f"[red]{snapshot.error}[/red]" if snapshot.has_error else "-",
    )
    console.print(table)
    return table


def main():
    builder = SnapshotBuilder(render)
    readings = Subject()
    builder.mount(readings)

    for value in (21.5, 21.7, 22.0):
        time.sleep(0.2)
        readings.on_next(value)

    readings.on_error(IOError("sensor offline"))

    backup = Subject()
    builder.update(readings, backup)
    backup.on_next(20.9)
    backup.on_completed()

    builder.unmount()


if __name__ == "__main__":
    main()
