#!/usr/bin/env python3
"""
Script Studio Demo - Generates a script and splits it into parts.
Uses the configured provider when its API key is set, the mock writer otherwise.
"""

import sys
import tempfile
from pathlib import Path

# Add src to path so we can import scriptstudio
sys.path.insert(0, str(Path(__file__).parent / "src"))

from scriptstudio.config.loader import load_config
from scriptstudio.core.console import ConsoleLogger
from scriptstudio.providers.factory import create_generator_with_fallback
from scriptstudio.runtime.export import build_archive, write_parts
from scriptstudio.runtime.studio import ScriptStudio
from scriptstudio.storage.memory import InMemoryScriptStore

def run_demo():
    """Run the Script Studio demo."""
    print("🎬 Script Studio Demo - Generate and Split")
    print("=" * 50)

    try:
        print("📋 Loading config from studio.yaml...")
        config = load_config(Path(__file__).parent / "studio.yaml")
        print(f"✅ Provider: {config.generation.provider} ({config.generation.model})")

        logger = ConsoleLogger()
        generator = create_generator_with_fallback(config, logger)
        studio = ScriptStudio(config=config, generator=generator, store=InMemoryScriptStore(), logger=logger)

        requests = [
            {"idea": "Why octopuses are smarter than you think", "amount": 4},
            {"idea": "abc", "amount": 4},            # Rejected: idea too short
            {"idea": "A day in a bakery", "amount": 500},  # Rejected: too many scenes
        ]

        print("\n🧪 Generating scripts:")
        print("-" * 50)

        kept = None
        for i, payload in enumerate(requests, 1):
            print(f"\n{i}. Idea: \"{payload['idea']}\" ({payload['amount']} scenes)")
            result = studio.generate(payload, persist=True)

            if result.ok:
                print(f"   ✅ {len(result.data['parts'])} parts via {result.data['strategy']}")
                for n, part in enumerate(result.data["parts"], 1):
                    print(f"   [{n}] {part.splitlines()[0][:70]}")
                kept = kept or result
            else:
                print(f"   ⚠️  {result.status}: {result.message or result.errors}")

        print("\n✂️  Splitting pasted text without markers:")
        split = studio.split({"script": "Open wide. Cut to the hero! Why now? Fade out.", "amount": 3})
        print(f"   {split.data['strategy']}: {split.data['parts']}")

        if kept is not None:
            outdir = Path(tempfile.mkdtemp(prefix="scriptstudio-demo-"))
            files = write_parts(kept.data["parts"], outdir, full_script=kept.data["script"])
            (outdir / "script.zip").write_bytes(build_archive(kept.data["parts"], kept.data["script"]))
            print(f"\n📁 Wrote {len(files)} files and script.zip to {outdir}")

        history = studio.history()
        print(f"📚 History holds {len(history.data['scripts'])} script(s)")

        print("\n🎉 Demo completed successfully!")

    except Exception as e:
        print(f"❌ Demo failed: {e}")
        import traceback
        traceback.print_exc()
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(run_demo())
