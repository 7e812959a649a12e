# run.py
import os
import sys
import subprocess
from pathlib import Path

ROOT = Path(__file__).parent.resolve()
PY = ROOT / ".venv" / ("Scripts/python.exe" if os.name == "nt" else "bin/python")

def sh(*cmd):
    print(" ".join(map(str, cmd)))
    subprocess.check_call(list(cmd), cwd=ROOT)

if __name__ == "__main__":
    if not PY.exists():
        sh(sys.executable, "-m", "venv", ROOT / ".venv")
        sh(PY, "-m", "pip", "install", "-e", ROOT)
    # extra args go straight to `streamlit run`
    sh(PY, "-m", "streamlit", "run", "app.py", *sys.argv[1:])
