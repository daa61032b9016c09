import logging

from ledger_recon.utils.logging_config import resolve_level, setup_logging


def test_repeated_setup_does_not_duplicate_handlers():
    setup_logging(logging.INFO)
    logger = setup_logging(logging.WARNING)

    assert logger.name == "ledger_recon"
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_log_file_receives_debug_output(tmp_path):
    log_file = tmp_path / "logs" / "recon.log"
    logger = setup_logging(logging.DEBUG, log_file=log_file)

    logging.getLogger("ledger_recon.matching.engine").debug("candidate pairs: 3")
    for handler in logger.handlers:
        handler.flush()

    assert "candidate pairs: 3" in log_file.read_text()
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []


def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" Warning ") == logging.WARNING
    assert resolve_level(logging.ERROR) == logging.ERROR
    assert resolve_level("chatty") == logging.INFO


def test_level_name_and_rotation_settings(tmp_path):
    logger = setup_logging("warning", log_file=tmp_path / "recon.log", max_bytes=1024, backup_count=1)

    console, rotating = logger.handlers
    assert console.level == logging.WARNING
    assert rotating.maxBytes == 1024
    assert rotating.backupCount == 1
    # The file handler still sees DEBUG records
    assert logger.level == logging.DEBUG

    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
