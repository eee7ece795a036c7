import os
import sys
import subprocess


def main():
    """Main entry point for the Streamlit application."""
    # Set the working directory to the project root
    os.chdir(os.path.dirname(os.path.abspath(__file__)))

    # Run Streamlit using subprocess with specific environment
    env = os.environ.copy()
    env["PYTHONPATH"] = os.path.dirname(os.path.abspath(__file__))

    cmd = [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        "dani_ai/web/app.py",
        "--server.port=8501",
        "--server.address=localhost",
        "--server.headless=true",
        "--server.maxUploadSize=50",
        "--global.developmentMode=false"
    ]

    try:
        subprocess.run(cmd, env=env, check=True)
    except subprocess.CalledProcessError as e:
        print(f"Error running Streamlit: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
