"""Command-line interface for Script Studio."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from scriptstudio.config.loader import load_config, ConfigLoadError
from scriptstudio.config.schema import StudioConfig
from scriptstudio.core.console import ConsoleLogger
from scriptstudio.core.util import safe_json
from scriptstudio.providers.openai_generator import is_openai_available
from scriptstudio.runtime.export import build_archive, write_parts
from scriptstudio.segmenters.cascade import ScriptSegmenter


def _config_from_args(args) -> StudioConfig:
    path = getattr(args, "config", None)
    if path:
        return load_config(path)
    return StudioConfig()


def _read_source(source: Optional[str]) -> str:
    if not source or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def validate_config_command(args):
    """Validate a Script Studio config file."""
    try:
        config_path = Path(args.config_file)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            return 1

        print(f"Validating config: {config_path}")
        config = load_config(config_path)

        print("✅ Config validation successful!")
        print(f"   Version: {config.version}")
        print(f"   Provider: {config.generation.provider} ({config.generation.model})")
        print(f"   Limits: {config.limits.min_count}-{config.limits.max_count}, default {config.limits.default_count}")
        print(f"   History: {config.history.backend}")

        if args.verbose:
            print("\nDetails:")
            print(f"   API key env: {config.generation.api_key_env}")
            print(f"   Marker label: {config.segmentation.marker_label}")
            print(f"   History path: {config.history.path or 'none'} (limit {config.history.limit})")
            print(f"   Token TTL: {config.auth.token_ttl_days} days via {config.auth.secret_env}")

        return 0

    except ConfigLoadError as e:
        print(f"❌ Config validation failed: {e}")
        return 1
    except Exception as e:
        print(f"❌ Unexpected error: {e}")
        return 1


def _emit_parts(args, script: str, strategy: str, parts):
    if args.json:
        print(safe_json({"strategy": strategy, "parts": parts}))
    else:
        print(f"✂️  {len(parts)} parts via {strategy}")
        for number, text in enumerate(parts, start=1):
            print(f"\n[PART {number}]\n{text}")

    if args.out:
        written = write_parts(parts, args.out, full_script=script)
        if not args.json:
            print(f"\n📁 {len(written)} files written to {args.out}")
    if args.zip:
        Path(args.zip).write_bytes(build_archive(parts, full_script=script))
        if not args.json:
            print(f"🗜️  Archive written to {args.zip}")


def split_command(args):
    """Segment a script file (or stdin) into parts."""
    try:
        config = _config_from_args(args)
        label = args.label or config.segmentation.marker_label
        script = _read_source(args.source)
        segmentation = ScriptSegmenter(label).split(script, args.count)
        _emit_parts(args, script, segmentation.strategy, segmentation.texts)
        return 0

    except ConfigLoadError as e:
        print(f"❌ Config error: {e}")
        return 1
    except OSError as e:
        print(f"❌ Cannot read input: {e}")
        return 1


def _build_studio(config: StudioConfig, args, logger, with_generator: bool = True):
    from scriptstudio.providers.factory import create_generator
    from scriptstudio.providers.mock_generator import create_mock_generator
    from scriptstudio.runtime.studio import ScriptStudio
    from scriptstudio.storage import create_stores

    if getattr(args, "mock_generator", False):
        generator = create_mock_generator(default_count=config.limits.default_count)
    elif with_generator:
        generator = create_generator(config, logger)
    else:
        generator = None
    store, _ = create_stores(config)
    return ScriptStudio(config=config, generator=generator, store=store, logger=logger)


def generate_command(args):
    """Generate a script for an idea and split it into parts."""
    try:
        config = _config_from_args(args)
        logger = ConsoleLogger(quiet=args.json)
        studio = _build_studio(config, args, logger)

        count = args.count or config.limits.default_count
        result = studio.generate({"idea": args.idea, "amount": count}, persist=args.save)

        if not result.ok:
            if args.json:
                print(safe_json(result))
            else:
                print(f"❌ Generation failed ({result.status}): {result.message or result.errors}")
            return 1

        _emit_parts(args, result.data["script"], result.data["strategy"], result.data["parts"])
        if args.save and not args.json and "scriptId" in result.data:
            print(f"💾 Saved as {result.data['scriptId']}")
        return 0

    except ConfigLoadError as e:
        print(f"❌ Config error: {e}")
        return 1


def history_command(args):
    """List saved scripts."""
    try:
        config = _config_from_args(args)
        logger = ConsoleLogger(quiet=args.json)
        studio = _build_studio(config, args, logger, with_generator=False)

        if config.history.backend == "memory" and not args.json:
            print("ℹ️  History backend is in-memory; configure 'history.backend: sqlite' to keep scripts.")

        result = studio.history()
        if args.json:
            print(safe_json(result))
            return 0 if result.ok else 1
        if not result.ok:
            print(f"❌ {result.message}")
            return 1

        scripts = result.data["scripts"]
        print(f"📚 {len(scripts)} saved scripts")
        for item in scripts:
            print(f"   {item['createdAt']}  {item['id']}  [{item['amount']}]  {item['idea'][:60]}")
        return 0

    except ConfigLoadError as e:
        print(f"❌ Config error: {e}")
        return 1


def info_command(args):
    """Display Script Studio version and system information."""
    print("Script Studio CLI")
    print("=" * 50)

    # Try to get version from package
    try:
        import importlib.metadata
        version = importlib.metadata.version("script-studio")
        print(f"Version: {version}")
    except Exception:
        print("Version: development")

    print(f"Python: {sys.version.split()[0]}")

    # Check for optional dependencies
    print("\nOptional dependencies:")

    try:
        import openai
        print(f"   ✅ openai: {openai.__version__}")
        key_state = "set" if is_openai_available() else "not set"
        print(f"      OPENAI_API_KEY: {key_state}")
    except ImportError:
        print("   ❌ openai: not installed")

    try:
        import langchain_core
        print(f"   ✅ langchain-core: {langchain_core.__version__}")
    except ImportError:
        print("   ❌ langchain-core: not installed")

    return 0


def _add_output_args(parser):
    parser.add_argument("-n", "--count", type=int, help="Maximum number of parts (default: no limit for split)")
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    parser.add_argument("--out", help="Directory for per-part text files")
    parser.add_argument("--zip", help="Path of a zip archive with all parts")
    parser.add_argument("-c", "--config", help="Path to a Script Studio config YAML")


def create_parser():
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="scriptstudio",
        description="Generate video scripts and split them into downloadable parts"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a Script Studio config file"
    )
    validate_parser.add_argument(
        "config_file",
        help="Path to the config YAML file"
    )
    validate_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed settings"
    )

    # Split command
    split_parser = subparsers.add_parser(
        "split",
        help="Split an existing script into parts"
    )
    split_parser.add_argument(
        "source",
        nargs="?",
        default="-",
        help="Script file to split (default: stdin)"
    )
    split_parser.add_argument(
        "--label",
        help="Marker word (default: from config, 'Scene')"
    )
    _add_output_args(split_parser)

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a script for an idea"
    )
    generate_parser.add_argument(
        "idea",
        help="Short idea to turn into a script"
    )
    generate_parser.add_argument(
        "--mock-generator",
        action="store_true",
        help="Use the offline mock writer instead of the configured provider"
    )
    generate_parser.add_argument(
        "--save",
        action="store_true",
        help="Save the script to history"
    )
    _add_output_args(generate_parser)

    # History command
    history_parser = subparsers.add_parser(
        "history",
        help="List saved scripts"
    )
    history_parser.add_argument("-c", "--config", help="Path to a Script Studio config YAML")
    history_parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")

    # Info command
    subparsers.add_parser(
        "info",
        help="Display version and system information"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "validate":
        return validate_config_command(args)
    elif args.command == "split":
        return split_command(args)
    elif args.command == "generate":
        return generate_command(args)
    elif args.command == "history":
        return history_command(args)
    elif args.command == "info":
        return info_command(args)
    else:
        print(f"Unknown command: {args.command}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
