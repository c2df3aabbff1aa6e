# Main.py
""""" Entry point for the Python Calculator (console front end).

   Responsibilities:
   - Detect run mode (script vs PyInstaller.exe)
   - Verify required files exist in development mode
   - Load configuration and run the read-evaluate-print loop

   Commands inside the loop:
   - ':mode'  switch between degrees and radians for this session
   - ':quit'  leave (EOF works as well)

"""""
import sys
import logging
import pyperclip
from pathlib import Path
from CalcEngine import config_manager as config_manager, MathEngine as MathEngine
from CalcEngine import error as E
from CalcEngine.ScientificEngine import AngleMode

logger = logging.getLogger(__name__)


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent



def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
      In production (.exe) files are embedded by the bundler and this check is skipped.
    """

    modules_dir = PROJECT_ROOT / "CalcEngine"

    REQUIRED = [
        modules_dir / "MathEngine.py",
        modules_dir / "Lexer.py",
        modules_dir / "ScientificEngine.py",
        modules_dir / "config_manager.py",
        modules_dir / "error.py",
        PROJECT_ROOT / "config.json",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def copy_result(text):
    """Put the result on the clipboard; a missing clipboard backend is only logged."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.warning("Clipboard not available: %s", e)


def handle_line(line, mode, settings):
    """Process one input line.

    Returns:
        (output_text, mode) where mode may have been toggled by ':mode'.
    """
    problem = line.strip()
    if problem == ":mode":
        mode = ~mode
        return f"Mode: {mode}", mode

    try:
        ergebnis = MathEngine.calculate(problem, mode)
    except E.MathError as e:
        return f"Error {e.code}: {e.message}", mode

    if settings.get("copy_result"):
        copy_result(ergebnis.split(" ", 1)[-1])
    return ergebnis, mode


def repl(stdin=None, stdout=None):
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    settings = config_manager.load_setting_value("all")
    mode = AngleMode.from_setting(settings["angle_mode"])

    for line in stdin:
        if line.strip() in (":quit", ":q"):
            break
        if not line.strip():
            continue
        output, mode = handle_line(line, mode, settings)
        print(output, file=stdout)


def main():

    """
    Load configuration and start the console loop.
    - Keep this thin: no business logic here.
    """

    all_settings = config_manager.load_setting_value("all")
    logging.basicConfig(level=logging.DEBUG if all_settings.get("debug") else logging.WARNING)
    logger.info("Config loaded: %s", all_settings)

    try:
        repl()
    except E.ConfigError as e:
        print(f"Error {e.code}: {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    # Two explicit modes aid debugging & packaging clarity.
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe:
        check_files_exist()
    main()
