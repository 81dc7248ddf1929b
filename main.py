import sys
from pathlib import Path

from inventory_abc.logger import setup_logger
from inventory_abc.pipelines import AbcInventoryPipeline


def run_process(workbook_path: Path | None = None, test_mode: bool = False) -> int:
    """
    Main orchestration function: reads the inventory workbook, classifies it and
    exports the ABC report. Returns a process exit code.
    """
    setup_logger()
    pipeline = AbcInventoryPipeline(workbook_path=workbook_path, test_mode=test_mode)
    result = pipeline.run()
    return 0 if result is not None else 1


if __name__ == "__main__":
    args = [arg for arg in sys.argv[1:] if arg != "--test"]
    path = Path(args[0]) if args else None
    sys.exit(run_process(path, test_mode="--test" in sys.argv[1:]))
