"""CLI interface for the ordering system."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

# Fix encoding for Windows console
if sys.platform == "win32":
    try:
        sys.stdout.reconfigure(encoding='utf-8')
    except (AttributeError, ValueError):
        pass

from ..config import get_app_version, get_default_output_dir
from ..config.category_loader import get_expense_categories
from ..config.profile_loader import FormProfile, load_profile
from ..engine.order_number import OrderNumberScheme, generate
from ..engine.validation import FormValidationError
from ..export.excel_export import export_order_to_excel
from ..export.renderers import PrintRenderer, ScreenRenderer
from ..export.submission import write_submission
from ..session.ordering_system import OrderingSystem

logger = logging.getLogger(__name__)


class OrderFileError(Exception):
    """Raised when an order file cannot be read."""
    pass


def load_order_file(path: Path) -> Tuple[FormProfile, str]:
    """Load an order from a JSON or YAML file.

    The file has the layout of a form profile: details, items, adjustments
    and an optional order_number.

    Returns:
        (profile, order_number) with order_number "" if the file has none

    Raises:
        OrderFileError: If the file is missing or not a mapping
    """
    if not path.exists():
        raise OrderFileError(f"Order file not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            # JSON is valid YAML
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise OrderFileError(f"Invalid order file {path}: {e}") from e
    if not isinstance(data, dict):
        raise OrderFileError(f"Order file {path} must contain a mapping")
    data.setdefault('name', path.stem)
    return FormProfile.from_dict(data), str(data.get('order_number') or "")


def process_order(
    profile: FormProfile,
    order_number: Optional[str] = None,
    print_view: bool = False,
    excel_path: Optional[str] = None,
    json_dir: Optional[str] = None,
) -> int:
    """Compute, validate and export one order.

    Returns:
        Exit code (0 on success, 1 on missing required fields)
    """
    system = OrderingSystem(profile=profile)
    if order_number:
        system.order_number.set(order_number)

    try:
        snapshot = system.order_form.submit()
    except FormValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        for field_name, message in e.result.errors.items():
            print(f"  {field_name}: {message}", file=sys.stderr)
        return 1

    if print_view:
        print(PrintRenderer().render(snapshot), end="")
    else:
        screen = ScreenRenderer().render(snapshot)
        for row in screen["totals_display"]:
            print(f"{row['label']:<20} {row['value']:>12} EUR")

    if excel_path:
        print(f"Excel: {export_order_to_excel(snapshot, excel_path)}")
    if json_dir:
        print(f"JSON: {write_submission(snapshot, json_dir)}")
    return 0


def _handle_order_number(args: argparse.Namespace) -> None:
    number = generate(
        args.scheme,
        contact_person=args.contact,
        sequence=args.sequence,
        year=args.year,
        department=args.department,
    )
    print(number)


def _handle_categories() -> None:
    for category in get_expense_categories():
        print(category.label)


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Bestellsystem - order totals, order numbers and expense categories"
    )

    parser.add_argument(
        "--order",
        type=str,
        help="Order file (JSON or YAML) with details, items and adjustments"
    )

    parser.add_argument(
        "--sample",
        action="store_true",
        help="Use the sample order (Völkner Elektronik) instead of --order"
    )

    parser.add_argument(
        "--profile",
        type=str,
        help="Form profile to use as order (default: BESTELLSYSTEM_PROFILE or 'default')"
    )

    parser.add_argument(
        "--print",
        dest="print_view",
        action="store_true",
        help="Print the order sheet instead of the totals"
    )

    parser.add_argument(
        "--excel",
        type=str,
        help="Write the order to this Excel file"
    )

    parser.add_argument(
        "--json-dir",
        type=str,
        help="Write the submission record (JSON) to this directory"
    )

    parser.add_argument(
        "--output",
        action="store_true",
        help="Write Excel and JSON to the default output directory"
    )

    parser.add_argument(
        "--order-number",
        action="store_true",
        help="Generate an order number and exit"
    )

    parser.add_argument(
        "--scheme",
        choices=[s.value for s in OrderNumberScheme],
        default=OrderNumberScheme.UNIQUE.value,
        help="Order number scheme (default: unique)"
    )

    parser.add_argument(
        "--contact",
        type=str,
        help="Contact person for the initials of a sequence order number"
    )

    parser.add_argument(
        "--sequence",
        type=str,
        default="1",
        help="Sequence number for the sequence scheme (default: 1)"
    )

    parser.add_argument(
        "--year",
        type=str,
        help="Two-digit year (default: current year)"
    )

    parser.add_argument(
        "--department",
        type=str,
        help="Department code (default: BESTELLSYSTEM_DEPARTMENT or THA)"
    )

    parser.add_argument(
        "--number",
        type=str,
        help="Order number to attach to the order"
    )

    parser.add_argument(
        "--categories",
        action="store_true",
        help="List expense categories (Kostenarten) and exit"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose debug output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_app_version()}"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.categories:
        _handle_categories()
        return

    if args.year and len(args.year) > 2:
        parser.error("--year must have at most two digits")

    if args.order_number:
        _handle_order_number(args)
        return

    if sum(bool(x) for x in (args.order, args.sample, args.profile)) != 1:
        parser.error("exactly one of --order, --sample or --profile is required")

    excel_path = args.excel
    json_dir = args.json_dir
    if args.output:
        output_dir = get_default_output_dir()
        json_dir = json_dir or str(output_dir)
        excel_path = excel_path or str(output_dir / "bestellung.xlsx")

    try:
        if args.order:
            profile, file_order_number = load_order_file(Path(args.order))
            order_number = args.number or file_order_number
        else:
            profile = load_profile("sample" if args.sample else args.profile)
            order_number = args.number

        exit_code = process_order(
            profile,
            order_number=order_number,
            print_view=args.print_view,
            excel_path=excel_path,
            json_dir=json_dir,
        )
    except (OrderFileError, FileNotFoundError, ValueError) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
