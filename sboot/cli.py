"""sboot command line interface.

Commands::

    sboot scan [-v] [-o structure.json]
    sboot create module billing
    sboot create resource entity Invoice --module billing [--full] [--idtype SERIAL]
    sboot create resource service Reporting Service --module billing --standalone
    sboot config --init | --view | --reset [--path sboot.config.json]

Generated files overwrite existing files of the same name without asking.
"""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from rich.tree import Tree

from sboot import __version__
from sboot.config import Config, IdType, config_path_from_env
from sboot.errors import ConfigError, NoModulesFoundError, SbootError
from sboot.generator import (
    GenerationOptions,
    GenerationRequest,
    ModuleGenerator,
    ResourceGenerator,
    ResourceKind,
)
from sboot.scanner import PathResolver, ProjectScanner, ProjectStructure
from sboot.scanner.models import MapperType
from sboot.utils import (
    console,
    create_progress,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
    save_json,
)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    parser = argparse.ArgumentParser(
        prog="sboot",
        description="CLI tool for Spring Boot projects following Screaming Architecture",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Regenerating a resource overwrites the existing file without confirmation.\n"
            "A failed --full run keeps the files created before the failing step."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    scan = commands.add_parser("scan", help="Scan the current Spring Boot project structure")
    scan.add_argument("-v", "--verbose", action="store_true", help="Show the scanned structure")
    scan.add_argument("-o", "--output", help="Write the scan result to a JSON file")

    create = commands.add_parser("create", help="Create a new module or resource")
    create_kinds = create.add_subparsers(dest="create_type", required=True)

    module = create_kinds.add_parser("module", help="Scaffold a new module")
    module.add_argument("name", help="Module name (lowercase letters and digits)")
    _add_common_create_options(module)

    resource = create_kinds.add_parser("resource", help="Generate a resource in a module")
    resource.add_argument(
        "kind",
        type=str.lower,
        choices=[kind.value for kind in ResourceKind],
        help="Resource type",
    )
    resource.add_argument("name", nargs="+", help="Resource name, e.g. Invoice or 'Order Item'")
    resource.add_argument("-m", "--module", help="Target module (defaults to the only module)")
    resource.add_argument(
        "-i",
        "--idtype",
        type=str.upper,
        choices=[t.value for t in IdType],
        help="ID type for entities (default from configuration, then UUID)",
    )
    resource.add_argument(
        "--full",
        action="store_true",
        help="Entity only: also create repository, service and controller",
    )
    resource.add_argument(
        "--standalone",
        action="store_true",
        help="Service/controller only: do not require an existing entity",
    )
    _add_common_create_options(resource)

    config = commands.add_parser("config", help="Create, view or reset the configuration")
    action = config.add_mutually_exclusive_group(required=True)
    action.add_argument("-i", "--init", action="store_true", help="Write the default configuration")
    action.add_argument("-v", "--view", action="store_true", help="Show the configuration")
    action.add_argument("-r", "--reset", action="store_true", help="Reset to defaults")
    config.add_argument("-p", "--path", help="Configuration file path")

    return parser


def _add_common_create_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-v", "--verbose", action="store_true", help="Show created paths")
    parser.add_argument("-c", "--config", help="Configuration file path")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None, cwd: Optional[Path] = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.command == "create" and args.create_type == "resource":
        if args.full and args.kind != ResourceKind.ENTITY.value:
            parser.error("--full is only valid for entity resources")
        if args.standalone and args.kind not in (
            ResourceKind.SERVICE.value,
            ResourceKind.CONTROLLER.value,
        ):
            parser.error("--standalone is only valid for service and controller resources")

    resolver = PathResolver(cwd)
    try:
        if args.command == "scan":
            asyncio.run(run_scan(resolver, verbose=args.verbose, output=args.output))
        elif args.command == "create" and args.create_type == "module":
            asyncio.run(run_create_module(resolver, args))
        elif args.command == "create":
            asyncio.run(run_create_resource(resolver, args))
        else:
            run_config(args)
    except (SbootError, OSError) as exc:
        print_error(f"Error: {exc}")
        if getattr(args, "verbose", False):
            console.print_exception()
        return 1
    return 0


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def scan_project(resolver: PathResolver) -> ProjectStructure:
    with create_progress() as progress:
        progress.add_task("Analyzing project structure...", total=None)
        return await ProjectScanner(resolver).scan()


async def run_scan(resolver: PathResolver, verbose: bool, output: Optional[str]) -> ProjectStructure:
    structure = await scan_project(resolver)
    print_success("Project structure scanned successfully!")

    if verbose:
        print_summary_table(
            {
                "Project root": str(resolver.find_project_root()),
                "Build tool": resolver.build_tool(),
                "Source path": str(structure.source_path),
                "Base package": structure.base_package or "(default package)",
                "Modules": str(len(structure.modules)),
            },
            title="Project Structure",
        )
        console.print(render_structure_tree(structure))

    if output:
        target = Path(output)
        if target.suffix != ".json":
            target = target.with_name(target.name + ".json")
        await save_json(structure.model_dump(mode="json"), target)
        print_info(f"Structure saved to {target}")
    return structure


async def run_create_module(resolver: PathResolver, args: argparse.Namespace) -> None:
    structure = await scan_project(resolver)
    if args.verbose:
        print_info(f"Base package found: {structure.base_package or '(default package)'}")
        print_info(f"Source path: {structure.source_path}")

    config = _load_config(args.config)
    result = await ModuleGenerator(structure, config, verbose=args.verbose).generate(args.name)
    print_success(f"Module '{result.module_name}' created successfully!")
    if args.verbose:
        _print_paths("Module structure created:", result.created_paths)


async def run_create_resource(resolver: PathResolver, args: argparse.Namespace) -> None:
    structure = await scan_project(resolver)
    config = _load_config(args.config)
    request = GenerationRequest(
        name=" ".join(args.name),
        type=ResourceKind(args.kind),
        module=resolve_module(structure, args.module),
        entity_based=not args.standalone,
        full=args.full,
        options=GenerationOptions(id_type=args.idtype),
    )
    generator = ResourceGenerator(structure, config, verbose=args.verbose)
    result = await generator.generate(request)
    print_success(f"Resource '{request.name}' created successfully!")
    if args.verbose:
        _print_paths("Files created:", result.created_files)


def run_config(args: argparse.Namespace) -> None:
    path = Path(args.path) if args.path else config_path_from_env()

    if args.init:
        if path.exists():
            print_warning("WARNING: Configuration already exists!")
            console.print("Use --reset to reset the configuration or --view to see current settings.")
            console.print(f"[dim]Configuration file: {path}[/dim]")
            return
        saved = Config().save(path)
        print_success("Configuration initialized successfully!")
        print_info(f"Configuration file created at: {saved}")
        return

    if not path.exists():
        raise ConfigError(f"No configuration found at {path}. Use --init to create one.")

    if args.reset:
        saved = Config().save(path)
        print_success(f"Configuration reset successfully: {saved}")
        return

    console.print(f"[dim]Using configuration from: {path}[/dim]")
    print_config(Config.load(path))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def resolve_module(structure: ProjectStructure, requested: Optional[str]) -> str:
    """Pick the target module: the requested one, or the only one there is.

    Existence of a requested module is checked by the generator.
    """
    if requested:
        return requested
    names = structure.module_names()
    if not names:
        raise NoModulesFoundError("No modules found in project. Create a module first.")
    if len(names) > 1:
        raise SbootError(f"Several modules found ({', '.join(names)}); choose one with --module")
    return names[0]


def render_structure_tree(structure: ProjectStructure) -> Tree:
    """Build a Rich tree of modules, layers, folders and resources."""
    tree = Tree(f"[bold blue]{structure.base_package or '(default package)'}[/bold blue]")
    for module in structure.modules:
        module_node = tree.add(f"[green]{module.name}[/green]")
        for layer_name, layer in module.layers.items():
            if layer is None:
                continue
            layer_node = module_node.add(f"[yellow]{layer_name.value}[/yellow]")
            for directory in layer.directories:
                layer_node.add(directory)
            if not layer.resources:
                continue
            resources_node = layer_node.add("[cyan]Resources[/cyan]")
            for resource in layer.resources:
                type_info = resource.type.value
                if resource.mapper_type is not MapperType.NONE:
                    type_info += f" ({resource.mapper_type.value})"
                label = f"{resource.name} ({type_info})"
                if resource.implementation:
                    label += f" [dim](implemented by {resource.implementation})[/dim]"
                resources_node.add(label)
    return tree


def print_config(config: Config) -> None:
    rows: dict[str, str] = {}
    for layer_name, layer in config.module_structure.layers.items():
        folders = ", ".join(layer.folders) if layer.enabled and layer.folders else "-"
        rows[f"Layer {layer_name}"] = f"{_yes_no(layer.enabled)} ({folders})"
    rows["Default ID type"] = config.entity_preferences.default_id_type.value
    rows["Mapper type"] = config.mapper_preferences.type
    if config.mapper_preferences.type == "mapstruct":
        rows["Mapper Spring model"] = _yes_no(config.mapper_preferences.use_spring_model)
    rows["Mapper bidirectional"] = _yes_no(config.mapper_preferences.bidirectional)
    rows["DTO location"] = config.dto_preferences.default_location
    rows["DTO types"] = ", ".join(config.dto_preferences.types) or "None"
    rows["DTO Lombok"] = _yes_no(config.dto_preferences.use_lombok)
    rows["Enum display name"] = _yes_no(config.enum_preferences.include_display_name)
    rows["Service @Transactional"] = _yes_no(config.service_preferences.use_transactional)
    rows["Constructor injection"] = _yes_no(config.service_preferences.constructor_injection)
    print_summary_table(rows, title="Current Configuration")


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def _load_config(path: Optional[str]) -> Config:
    return Config.load(Path(path) if path else config_path_from_env())


def _print_paths(title: str, paths: list[Path]) -> None:
    console.print(f"\n{title}")
    for path in paths:
        console.print(f"[dim]- {path}[/dim]")


if __name__ == "__main__":
    raise SystemExit(main())
