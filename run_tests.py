#!/usr/bin/env python3
import subprocess
import sys

def run_tests():
    try:
        print("Installing test dependencies...")
        subprocess.run([sys.executable, "-m", "pip", "install", "-e", ".[test]"], check=True)

        print("Running tests...")
        cmd = [
            sys.executable, "-m", "pytest",
            "tests/",
            "-v",
            "--cov=matrimony",
            "--cov-report=term-missing",
            "--cov-report=html",
        ]

        result = subprocess.run(cmd, capture_output=True, text=True)

        print("STDOUT:")
        print(result.stdout)
        print("STDERR:")
        print(result.stderr)

        if result.returncode == 0:
            print("All tests passed")
        else:
            print(f"Tests failed with exit code {result.returncode}")

        return result.returncode

    except subprocess.CalledProcessError as e:
        print(f"Command failed: {e}")
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}")
        return 1

if __name__ == "__main__":
    exit_code = run_tests()
    sys.exit(exit_code)
