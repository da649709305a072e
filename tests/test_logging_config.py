import logging

from nbody_sim.logging_config import setup_logging

def test_setup_logging_is_idempotent(tmp_path):
    log_file = tmp_path / "sim.log"
    setup_logging(logging.DEBUG)
    logger = setup_logging(logging.INFO, str(log_file))

    assert logger.name == "nbody_sim"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2  # console + file, not accumulated

    logging.getLogger("nbody_sim.simulation").info("hello from a module logger")
    assert "nbody_sim.simulation - INFO - hello from a module logger" in log_file.read_text()
