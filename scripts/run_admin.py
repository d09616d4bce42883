#!/usr/bin/env python3
"""
Admin console entrypoint - validates configuration and launches the selected front end.
"""

import sys
import os
from pathlib import Path

# Load environment variables from .env file first
import dotenv
dotenv.load_dotenv()

# Add project root to path for imports (src/, tui/ and util/ are all in project root)
sys.path.insert(0, str(Path(__file__).parent.parent))

def main():
    """Launch the TUI or print how to serve the API, depending on ADMIN_UI_TYPE."""
    try:
        from src.core import config

        issues = config.validate_admin_config()
        if issues:
            for issue in issues:
                print(f"❌ {issue}")
            return 1

        ui_type = config.get_ui_type()

        if ui_type == "tui":
            try:
                from tui.main import main as tui_main
                tui_main()
            except ImportError as e:
                print(f"❌ Failed to import admin TUI: {e}")
                print("   Make sure textual is installed: pip install textual")
                return 1
        elif ui_type == "web":
            host = os.getenv("API_HOST", "127.0.0.1")
            port = os.getenv("API_PORT", "8000")
            print("🥚 Egg Supply Admin API")
            print(f"   Serve it with: uvicorn src.api.main:app --host {host} --port {port}")
            if config.debug_enabled():
                print(f"   Interactive docs: http://{host}:{port}/docs")
        return 0

    except KeyboardInterrupt:
        print("\nℹ️  Admin console interrupted")
        return 0

if __name__ == "__main__":
    sys.exit(main())
