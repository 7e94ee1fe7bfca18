import subprocess
import sys


def pyinstaller_command() -> list[str]:
    return [
        "pyinstaller",
        "--onefile",
        "--name",
        "PrimordialisSaveManager",
        "--hidden-import",
        "pynput.keyboard",
        "--collect-all",
        "pynput",
        "--clean",
        "primordialis_save_manager/__main__.py",
    ]


def build_binary() -> None:
    if not (sys.platform.startswith("linux") or sys.platform == "win32"):
        raise RuntimeError("build-binary is intended to run on Linux or Windows")

    subprocess.run(pyinstaller_command(), check=True)


if __name__ == "__main__":
    build_binary()
