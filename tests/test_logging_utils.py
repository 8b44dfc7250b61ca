import logging

from redirect_chain.logging_utils import CLIENT_LOGGERS, configure_logging


def restore_root(handlers, level):
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    for name in CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)


def test_verbose_run_writes_hops_to_log_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    log_file = tmp_path / "logs" / "run.log"
    try:
        configure_logging(log_file, verbose=True)
        logging.getLogger("redirect_chain.chain").debug("https://a.example/ -> https://b.example/")
        assert logging.getLogger("httpx").level == logging.DEBUG
    finally:
        restore_root(saved_handlers, saved_level)

    content = log_file.read_text()
    assert "| DEBUG | redirect_chain.chain | https://a.example/ -> https://b.example/" in content


def test_quiet_run_silences_client_request_logs():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging()
        assert root.level == logging.INFO
        for name in CLIENT_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
    finally:
        restore_root(saved_handlers, saved_level)
