import logging

from pagequote.core.logging import ClientDataFilter


def test_client_data_filter_redacts_email_and_cpf(caplog):
    logger = logging.getLogger("test.client_data")
    logger.setLevel(logging.INFO)
    logger.filters = []
    logger.addFilter(ClientDataFilter())

    with caplog.at_level(logging.INFO, logger="test.client_data"):
        logger.info("Upload maria.silva@example.com CPF 123.456.789-09")

    assert "maria.silva@example.com" not in caplog.text
    assert "123.456.789-09" not in caplog.text
    assert "[REDACTED]" in caplog.text


def test_client_data_filter_redacts_tax_id_and_phone_in_file_name_args(caplog):
    logger = logging.getLogger("test.client_args")
    logger.setLevel(logging.INFO)
    logger.filters = []
    logger.addFilter(ClientDataFilter())

    file_name = "contrato 12.345.678/0001-90 (11) 98765-4321.pdf"
    with caplog.at_level(logging.INFO, logger="test.client_args"):
        logger.info("Analysis deepPass id=%s file=%s pages=%d", "a1", file_name, 3)

    assert "12.345.678/0001-90" not in caplog.text
    assert "98765-4321" not in caplog.text
    assert "file=contrato [REDACTED]" in caplog.text
    assert "id=a1" in caplog.text
    assert "pages=3" in caplog.text


def test_client_data_filter_keeps_prices_and_counts(caplog):
    logger = logging.getLogger("test.client_plain")
    logger.setLevel(logging.INFO)
    logger.filters = []
    logger.addFilter(ClientDataFilter())

    with caplog.at_level(logging.INFO, logger="test.client_plain"):
        logger.info("Analysis fastPass id=a1 pages=12 total=108.00")

    assert "pages=12 total=108.00" in caplog.text
    assert "[REDACTED]" not in caplog.text
