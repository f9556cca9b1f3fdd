import sys
from pathlib import Path

# Add the src directory to Python path for imports
project_dir = Path(__file__).parent
src_dir = project_dir / "src"
sys.path.insert(0, str(src_dir))
sys.path.insert(0, str(project_dir))

# Ensure Python 3 is being used
def pytest_configure(config):
    """
    Validate Python version and register the test markers
    """
    if sys.version_info < (3, 9):
        raise SystemError("Python 3.9 or newer is required to run these tests")

    config.addinivalue_line(
        "markers", "integration: runs a full ledger through the service and handler"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
