"""Run Streamlit app from project root. Use: python run_app.py"""
import os
import subprocess
import sys

root = os.path.dirname(os.path.abspath(__file__))
os.chdir(root)
env = dict(os.environ, PYTHONPATH=os.pathsep.join(filter(None, [root, os.environ.get("PYTHONPATH")])))
subprocess.run(
    [sys.executable, "-m", "streamlit", "run", os.path.join("resume_match_ai", "app.py")],
    check=True,
    env=env,
)
