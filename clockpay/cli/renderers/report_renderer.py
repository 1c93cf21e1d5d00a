"""Rich renderer for payroll runs.

Transforms a PayrollRun into per-employee panels and a closing summary.
"""

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table

from clockpay.sdk.aggregator import DayAggregate, EmployeePeriodTotals
from clockpay.sdk.breaks import break_segments
from clockpay.sdk.periods import PayrollRun
from clockpay.sdk.timeparse import format_minutes

CLOCK_FORMAT = "%I:%M %p"


def render_run(console: Console, run: PayrollRun) -> None:
    """Render a payroll run as Rich tables.

    Args:
        console: Rich Console instance
        run: Result of run_payroll()
    """
    for error in run.file_errors:
        console.print(Panel(
            f"[red]{error.message}[/red]",
            title=f"Skipped {error.path}",
            border_style="red"
        ))

    if run.unknown_employees:
        console.print(Panel(
            f"[yellow]Not on roster (paid at rate 0): {', '.join(run.unknown_employees)}[/yellow]",
            title="Roster",
            border_style="yellow"
        ))

    if run.warnings:
        skipped = sum(1 for w in run.warnings if w.skipped)
        console.print(
            f"[yellow]{len(run.warnings)} row warning(s), {skipped} row(s) skipped "
            f"(run with LOG_LEVEL=WARNING or --format json for details)[/yellow]"
        )

    console.print(f"Service amount to distribute: [bold]${run.service_amount:,.2f}[/bold]")
    console.print()

    for employee in run.employees:
        _render_employee(console, employee)

    _render_summary(console, run)


def _format_sessions(day: DayAggregate) -> str:
    """Entry/exit per session with the break before each later one."""
    parts = []
    for session, break_before in break_segments(day.sessions):
        if break_before:
            parts.append(f"Break: {int(break_before)} min")
        parts.append(
            f"In: {session.entry.strftime(CLOCK_FORMAT)} | Out: {session.exit.strftime(CLOCK_FORMAT)}"
        )
    return " | ".join(parts)


def _render_employee(console: Console, employee: EmployeePeriodTotals) -> None:
    days = Table(box=box.SIMPLE, show_edge=False)
    days.add_column("Date")
    days.add_column("Hours", justify="right")
    days.add_column("Break", justify="right")
    days.add_column("Sessions")

    for day in employee.days:
        date_label = day.day.isoformat()
        if day.is_holiday:
            date_label += " [magenta](holiday)[/magenta]"
        days.add_row(
            date_label,
            f"{day.worked_minutes / 60:6.2f} h",
            f"{day.break_minutes:.0f} min",
            _format_sessions(day),
        )

    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column("key", style="dim")
    summary.add_column("value", justify="right")

    summary.add_row(
        "Total hours",
        f"{employee.worked_minutes / 60:.2f} h ({format_minutes(employee.worked_minutes)})",
    )
    summary.add_row("Total break", f"{employee.break_minutes:.0f} min")
    if employee.vacation_days:
        summary.add_row(
            "Vacation",
            f"{employee.vacation_days} day(s), {employee.vacation_minutes / 60:.2f} h credited "
            f"(not counted for service)",
        )
    summary.add_row(
        "Normal time",
        f"{employee.normal_minutes / 60:.2f} h | ${employee.normal_pay:,.2f}",
    )
    summary.add_row(
        "Extra time",
        f"{employee.extra_minutes / 60:.2f} h | ${employee.extra_pay:,.2f}",
    )
    if employee.holiday_premium:
        summary.add_row("Holiday premium", f"${employee.holiday_premium:,.2f}")
    summary.add_row("Worked pay", f"${employee.worked_pay:,.2f}")
    if employee.vacation_days:
        summary.add_row("Vacation pay", f"${employee.vacation_pay:,.2f}")
    summary.add_row("Service", f"${employee.service_share:,.2f}")
    summary.add_row("Deduction", f"-${employee.mandatory_deduction:,.2f}")

    net_style = "red" if employee.net_pay < 0 else "green"
    summary.add_row("[bold]Net pay[/bold]", f"[bold {net_style}]${employee.net_pay:,.2f}[/bold {net_style}]")

    title = employee.employee_id
    if not employee.on_roster:
        title += " [yellow](not on roster)[/yellow]"

    console.print(Panel(Group(days, summary), title=title, title_align="left"))


def _render_summary(console: Console, run: PayrollRun) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")

    table.add_row("Files processed", str(len(run.files)))
    table.add_row("Employees", str(len(run.employees)))
    table.add_row("Hours worked (all)", f"{run.totals.total_worked_minutes / 60:.2f} h")
    table.add_row("[bold]Total to pay[/bold]", f"[bold]${run.grand_total:,.2f}[/bold]")

    console.print(Panel(table, title="Summary", border_style="dim"))
