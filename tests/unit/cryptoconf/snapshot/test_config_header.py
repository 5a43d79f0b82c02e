"""Tests for reading selections out of an mbed-style config header."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from cryptoconf.snapshot.header import parse_config_header, read_config_header
from cryptoconf.validation.validator import ConfigValidator

CONFIG_H = textwrap.dedent("""\
    #ifndef MBEDCRYPTO_CONFIG_H
    #define MBEDCRYPTO_CONFIG_H

    /**
     * \\def MBEDCRYPTO_HAVE_ASM
     */
    #define MBEDCRYPTO_HAVE_ASM

    //#define MBEDCRYPTO_THREADING_C
    /* #define MBEDCRYPTO_AES_ALT */
    #define MBEDCRYPTO_GCM_C   /* Galois/Counter Mode */

    #define MBEDCRYPTO_MPI_WINDOW_SIZE            4 /**< Maximum window size */
    #define MBEDCRYPTO_CTR_DRBG_RESEED_INTERVAL   0x2710UL
    #define MBEDCRYPTO_PLATFORM_STD_CALLOC        calloc
    #define _CRT_SECURE_NO_DEPRECATE 1

    #endif /* MBEDCRYPTO_CONFIG_H */
""")


class TestParseConfigHeader:
    def test_selections(self):
        pairs = parse_config_header(CONFIG_H)
        assert pairs == [
            ("HAVE_ASM", True),
            ("THREADING_C", False),
            ("AES_ALT", False),
            ("GCM_C", True),
            ("MPI_WINDOW_SIZE", 4),
            ("CTR_DRBG_RESEED_INTERVAL", 10000),
            ("PLATFORM_STD_CALLOC", True),
        ]

    def test_include_guard_and_reserved_names_skipped(self):
        names = [name for name, _ in parse_config_header(CONFIG_H)]
        assert "CONFIG_H" not in names
        assert "_CRT_SECURE_NO_DEPRECATE" not in names

    def test_doc_comment_def_is_not_a_toggle(self):
        pairs = dict(parse_config_header(CONFIG_H))
        assert pairs["HAVE_ASM"] is True

    def test_later_lines_override(self):
        text = "#define MBEDCRYPTO_GCM_C\n//#define MBEDCRYPTO_GCM_C\n#define MBEDCRYPTO_AES_C\n"
        assert parse_config_header(text) == [("GCM_C", False), ("AES_C", True)]

    def test_unprefixed_names_pass_through(self):
        assert parse_config_header("#define GCM_C\n") == [("GCM_C", True)]

    def test_custom_prefix(self):
        text = "#define MBEDTLS_GCM_C\n"
        assert parse_config_header(text, prefix="MBEDTLS_") == [("GCM_C", True)]

    def test_empty(self):
        assert parse_config_header("") == []


class TestReadConfigHeader:
    def test_read_file(self, tmp_path: Path):
        f = tmp_path / "config.h"
        f.write_text(CONFIG_H)
        assert ("GCM_C", True) in read_config_header(f)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            read_config_header(tmp_path / "missing.h")


# ---------------------------------------------------------------------------
# Stock mbed-crypto header
# ---------------------------------------------------------------------------

STOCK_HEADER = Path(__file__).parent / "data" / "mbedcrypto_config.h"


class TestStockHeader:
    def test_every_toggle_is_cataloged(self):
        catalog = ConfigValidator.builtin().catalog
        unknown = [name for name, _ in read_config_header(STOCK_HEADER) if name not in catalog]
        assert unknown == []

    def test_platform_std_overrides_read_as_disabled(self):
        pairs = dict(read_config_header(STOCK_HEADER))
        assert pairs["PLATFORM_STD_MEM_HDR"] is False
        assert pairs["PLATFORM_STD_NV_SEED_FILE"] is False
        assert pairs["PLATFORM_NO_STD_FUNCTIONS"] is False

    def test_stock_header_certifies(self):
        result = ConfigValidator.builtin().validate(read_config_header(STOCK_HEADER))
        assert result.passed, result.violations
        assert "AES_C" in result.certificate.enabled_names()
        assert "PLATFORM_STD_CALLOC" not in result.certificate.enabled_names()
