import logging

import pytest

@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the command line installs so they do not outlive a test."""
    yield
    logger = logging.getLogger("nbody_sim")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
