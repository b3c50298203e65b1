"""
Command Line Interface for Document Studio

Provides entry points for:
- docstudio new: Create a project file from a list of layouts
- docstudio export: Export a project to HTML, PPTX or PNG
- docstudio layouts: List the layouts and themes of a catalog
- docstudio validate: Check a project file against its schema and catalog
- docstudio diagnose: Run catalog diagnostics
- docstudio-export: Shortcut for ``docstudio export``
"""

import sys
import json
import logging
import argparse
from pathlib import Path

from .catalog import LayoutRegistry
from .content_types import ContentType
from .document import load_project, save_project, validate_project_json
from .editor import ProjectEditor
from .settings import EditorSettings, load_settings

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


def _settings(args: argparse.Namespace) -> EditorSettings:
    return load_settings(getattr(args, 'settings', None))


def _registry(args: argparse.Namespace, settings: EditorSettings) -> LayoutRegistry:
    source = getattr(args, 'catalog', None) or settings.catalog_path
    registry = LayoutRegistry.load(source)
    if registry.catalog.fallback:
        print(f"Note: catalog unavailable ({registry.catalog.load_error}); using built-in layouts")
    return registry


def _report_error(args: argparse.Namespace, exc: Exception) -> int:
    print(f"\nError: {exc}")
    if getattr(args, 'verbose', False):
        import traceback
        traceback.print_exc()
    return 1


def new_command(args: argparse.Namespace) -> int:
    """Execute new command."""
    print("=" * 60)
    print("New Project")
    print("=" * 60)

    try:
        settings = _settings(args)
        registry = _registry(args, settings)
        editor = ProjectEditor(registry, settings=settings)
        editor.rename(args.name)
        editor.set_content_type(args.content_type or settings.default_content_type)
        if args.theme:
            editor.set_theme(args.theme).unwrap()

        for layout_id in args.layout or []:
            editor.add_item(layout_id).unwrap()

        save_project(editor.project, args.output)
        print(f"Content type: {editor.project.content_type.value}")
        print(f"Theme: {editor.project.theme}")
        print(f"Items: {len(editor.items)}")
        print(f"Saved to: {args.output}")
        return 0

    except Exception as e:
        return _report_error(args, e)


def export_command(args: argparse.Namespace) -> int:
    """Execute export command."""
    from .exporters import export_project

    print("=" * 60)
    print("Document Export")
    print("=" * 60)

    try:
        settings = _settings(args)
        registry = _registry(args, settings)
        project = load_project(args.input)
        export_format = args.format or Path(args.output).suffix.lstrip('.') or 'html'
        print(f"Project: {project.name} ({project.content_type.value}, {len(project.items)} items)")

        report = export_project(project, registry, export_format, args.output, strict=args.strict)

        if args.json:
            print(json.dumps(report.to_dict(), indent=2))
        else:
            report.print_report()

        if report.failures:
            print(f"\nExported with {len(report.failures)} failed item(s)")
            return 2
        print("\nExport complete!")
        return 0

    except Exception as e:
        return _report_error(args, e)


def layouts_command(args: argparse.Namespace) -> int:
    """Execute layouts command."""
    try:
        settings = _settings(args)
        registry = _registry(args, settings)

        if args.content_type:
            layouts = registry.layouts_for_content_type(args.content_type)
        elif args.category:
            layouts = registry.get_layouts_by_category(args.category)
        else:
            layouts = registry.list_layouts()

        if args.json:
            print(json.dumps({
                'layouts': [layout.model_dump(mode='json', by_alias=True) for layout in layouts],
                'themes': [theme.model_dump(mode='json', by_alias=True) for theme in registry.list_themes()],
            }, indent=2))
            return 0

        print("=" * 60)
        print(f"Layouts ({len(layouts)})")
        print("=" * 60)
        for layout in layouts:
            slots = ", ".join(f"{s.id}:{s.content_type.value}" for s in layout.slots)
            print(f"  {layout.id:<22} [{layout.category}] {layout.name}")
            print(f"      slots: {slots}")
        print("-" * 60)
        print("Themes: " + ", ".join(theme.id for theme in registry.list_themes()))
        return 0

    except Exception as e:
        return _report_error(args, e)


def validate_command(args: argparse.Namespace) -> int:
    """Execute validate command."""
    from .diagnose import diagnose_project

    try:
        errors = validate_project_json(args.input)
        if errors:
            print(f"Schema validation failed for {args.input}:")
            for error in errors:
                print(f"  - {error}")
            return 1

        settings = _settings(args)
        registry = _registry(args, settings)
        report = diagnose_project(load_project(args.input), registry)

        if args.json:
            print(json.dumps(report.to_dict(), indent=2))
        else:
            print(f"Schema: OK ({args.input})")
            report.print_report()

        if args.strict and (report.has_blocking_issues or report.warnings):
            return 1
        return 0

    except Exception as e:
        return _report_error(args, e)


def diagnose_command(args: argparse.Namespace) -> int:
    """Execute diagnose command."""
    from .diagnose import diagnose_catalog

    try:
        settings = _settings(args)
        registry = LayoutRegistry.load(args.catalog or settings.catalog_path)
        report = diagnose_catalog(registry)

        if args.json:
            print(json.dumps(report.to_dict(), indent=2))
        else:
            report.print_report()

        if args.strict and report.has_blocking_issues:
            return 1
        return 0

    except Exception as e:
        return _report_error(args, e)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Document Studio - compose and export presentations, posts, resumes and websites',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s new deck.json --layout title-slide --layout content-slide
  %(prog)s export deck.json deck.pptx
  %(prog)s export site.json site.html --catalog components.yaml
  %(prog)s layouts --content-type post
  %(prog)s validate deck.json --strict
  %(prog)s diagnose --catalog components.yaml --json
        """
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Show detailed output')

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--catalog', help='Layout/theme catalog file (YAML/JSON)')
    common.add_argument('--settings', help='Editor settings file (YAML/JSON)')
    common.add_argument('-v', '--verbose', action='store_true', default=argparse.SUPPRESS, help='Show detailed output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # New command
    new_parser = subparsers.add_parser('new', parents=[common], help='Create a project file')
    new_parser.add_argument('output', help='Project JSON file to write')
    new_parser.add_argument('--name', default='New Project', help='Project name')
    new_parser.add_argument('--content-type', choices=[c.value for c in ContentType], help='Document shape')
    new_parser.add_argument('--theme', help='Theme id')
    new_parser.add_argument('--layout', '-l', action='append', help='Layout id to add (repeatable)')

    # Export command
    export_parser = subparsers.add_parser('export', parents=[common], help='Export a project')
    export_parser.add_argument('input', help='Project JSON file')
    export_parser.add_argument('output', help='Output file (.html, .pptx or .png)')
    export_parser.add_argument('--format', '-f', help='Export format (default: from output suffix)')
    export_parser.add_argument('--strict', action='store_true', help='Abort on the first item that fails')
    export_parser.add_argument('--json', action='store_true', help='Output the export report as JSON')

    # Layouts command
    layouts_parser = subparsers.add_parser('layouts', parents=[common], help='List layouts and themes')
    layouts_parser.add_argument('--category', help='Only layouts in this category')
    layouts_parser.add_argument('--content-type', choices=[c.value for c in ContentType],
                                help='Only layouts offered for this content type')
    layouts_parser.add_argument('--json', action='store_true', help='Output as JSON')

    # Validate command
    validate_parser = subparsers.add_parser('validate', parents=[common], help='Validate a project file')
    validate_parser.add_argument('input', help='Project JSON file')
    validate_parser.add_argument('--strict', action='store_true', help='Exit with error if warnings found')
    validate_parser.add_argument('--json', action='store_true', help='Output results as JSON')

    # Diagnose command
    diagnose_parser = subparsers.add_parser('diagnose', parents=[common], help='Run catalog diagnostics')
    diagnose_parser.add_argument('--strict', action='store_true', help='Exit with error if blocking issues found')
    diagnose_parser.add_argument('--json', action='store_true', help='Output results as JSON')

    return parser


COMMANDS = {
    'new': new_command,
    'export': export_command,
    'layouts': layouts_command,
    'validate': validate_command,
    'diagnose': diagnose_command,
}


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    _configure_logging(args.verbose)
    return COMMANDS[args.command](args)


# Entry points for direct script execution
def docstudio_export() -> int:
    """Entry point for docstudio-export command."""
    return main(['export'] + sys.argv[1:])


if __name__ == '__main__':
    sys.exit(main())
