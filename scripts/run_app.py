#!/usr/bin/env python
"""
Run the Streamlit price preview application.

Usage:
    python scripts/run_app.py
"""
import subprocess
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from price_preview.config.settings import get_settings


def main():
    # Get the UI module path
    project_root = Path(__file__).parent.parent
    ui_path = project_root / 'src' / 'price_preview' / 'ui' / 'app_streamlit.py'
    
    if not ui_path.exists():
        print(f"ERROR: UI module not found at {ui_path}")
        sys.exit(1)
    
    # Run streamlit
    settings = get_settings()
    cmd = [
        sys.executable, '-m', 'streamlit', 'run', str(ui_path),
        '--server.port', str(settings.ui_port),
    ]
    print(f"Starting Streamlit: {' '.join(cmd)}")
    
    try:
        subprocess.run(cmd, cwd=str(project_root))
    except KeyboardInterrupt:
        print("\nApplication stopped.")


if __name__ == "__main__":
    main()
