"""Start the Bestellsystem web app (Streamlit).

Extra arguments are passed on to `streamlit run`, e.g.
`python run_streamlit.py --server.port 8502`.
"""
import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent
APP_PATH = PROJECT_ROOT / "bestellsystem" / "web" / "app.py"


def build_command(extra_args):
    return [sys.executable, "-m", "streamlit", "run", str(APP_PATH), "--server.headless", "true", *extra_args]


def main():
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(PROJECT_ROOT), env.get("PYTHONPATH", "")) if p)
    try:
        subprocess.run(build_command(sys.argv[1:]), check=True, env=env, cwd=str(PROJECT_ROOT))
    except KeyboardInterrupt:
        sys.exit(0)
    except subprocess.CalledProcessError as e:
        sys.exit(e.returncode)


if __name__ == "__main__":
    main()
