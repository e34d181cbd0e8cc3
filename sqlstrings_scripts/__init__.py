import subprocess
import shutil
import os
import sys

def run_unit_tests():
    """Run unit tests in sqlstrings/tests."""
    print("Running unit tests...")
    result = subprocess.run([sys.executable, "-m", "pytest", "sqlstrings/tests"], check=False)
    sys.exit(result.returncode)

def run_integration_tests():
    """Run database integration tests in tests/."""
    print("Running integration tests...")
    # Postgres tests are skipped unless DATABASE_URL points at a reachable server
    result = subprocess.run([sys.executable, "-m", "pytest", "tests"], check=False)
    sys.exit(result.returncode)

def run_all_tests():
    """Run all tests (unit + integration)."""
    print("Running all tests...")
    result = subprocess.run([sys.executable, "-m", "pytest"], check=False)
    sys.exit(result.returncode)

def clean_project():
    """Remove build and test artifacts: __pycache__, .pytest_cache, static/test-sqlite."""
    folders_to_remove = [
        ".pytest_cache",
        "build",
        "sqlstrings.egg-info",
        os.path.join("static", "test-sqlite"),
    ]

    for root, dirs, files in os.walk("."):
        if "__pycache__" in dirs:
            folders_to_remove.append(os.path.join(root, "__pycache__"))

    print("Cleaning up project...")
    for folder in set(folders_to_remove):
        if os.path.exists(folder):
            try:
                shutil.rmtree(folder)
                print(f"Removed: {folder}")
            except OSError as e:
                print(f"Failed to remove {folder}: {e}")

    print("Cleanup complete.")
