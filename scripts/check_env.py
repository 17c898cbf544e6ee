#!/usr/bin/env python3
"""
Setup check for the ResuVibe backend.
Creates a .env file from the template and reports which LLM providers are usable.
"""
import shutil
import sys
from pathlib import Path


ENV_TEMPLATE = """# ResuVibe Backend Configuration

# Secondary provider: Groq (required unless a Gemini key is set)
# Several keys, comma-separated, are rotated round-robin on rate limits
GROQ_API_KEYS=your_groq_api_key_here
# Optional: preferred Groq model, tried before the built-in fallback chain
# GROQ_MODEL=llama-3.3-70b-versatile

# Primary provider: Google Gemini (optional)
# GEMINI_API_KEY=your_gemini_api_key_here
# GEMINI_MODEL=gemini/gemini-2.0-flash

# Timeouts (seconds)
LLM_REQUEST_TIMEOUT_SECONDS=30
ANALYSIS_TIMEOUT_SECONDS=120

# Server
PORT=3000
LOG_LEVEL=INFO
ALLOWED_ORIGINS=*
"""


def print_header():
    print("""
╔═══════════════════════════════════════════════════════════════╗
║           ResuVibe Backend Setup                              ║
╚═══════════════════════════════════════════════════════════════╝
    """)


def check_python_version():
    """Check Python version is 3.10+"""
    print("Checking Python version...", end=" ")
    if sys.version_info < (3, 10):
        print("❌ FAILED")
        print(f"  Python 3.10+ required, found {sys.version}")
        return False
    print(f"✓ Python {sys.version_info.major}.{sys.version_info.minor}")
    return True


def create_env_file(root: Path):
    """Create .env file if it doesn't exist."""
    env_file = root / ".env"
    env_example = root / ".env.example"

    if env_file.exists():
        print(".env file already exists")
        return

    if env_example.exists():
        print("Creating .env from .env.example...", end=" ")
        shutil.copy(env_example, env_file)
    else:
        print("Creating .env file...", end=" ")
        env_file.write_text(ENV_TEMPLATE)
    print("✓")
    print("\n⚠️  IMPORTANT: Edit .env and add your API key(s)!")


def check_providers():
    """Report provider configuration (reads the .env created above)."""
    from configs import ConfigurationError, validate_configuration

    try:
        config = validate_configuration()
    except ConfigurationError as e:
        print(e)
        return False

    if config["primary_configured"]:
        print(f"✓ Gemini primary configured ({config['primary_model']})")
    else:
        print("ℹ️  No Gemini key, Groq will be called directly")
    print(f"✓ {config['groq_key_count']} Groq API key(s) configured")
    print(f"  Groq model chain: {' → '.join(config['groq_models'])}")
    return True


def main():
    print_header()
    root = Path(__file__).resolve().parent.parent
    sys.path.insert(0, str(root))

    all_ok = check_python_version()
    create_env_file(root)
    print("")

    if not check_providers():
        all_ok = False

    print("=" * 60)
    if all_ok:
        print("✅ Setup complete! You can now run:")
        print("   uvicorn resuvibe.api.main:app --port 3000")
        print("   or")
        print("   python -m resuvibe.main resume.pdf")
    else:
        print("⚠️  Setup incomplete. Please resolve the issues above.")
    print("=" * 60)
    return 0 if all_ok else 1


if __name__ == "__main__":
    sys.exit(main())
