"""
Pytest configuration and fixtures.
"""

import pytest

from ngxconf.options import ParserOptions


SAMPLE_CONFIG = """\
# Main configuration
user  www-data;
worker_processes 4;

events {
    worker_connections 1024;   # per worker
}

http {
    log_format main "$remote_addr - $remote_user";
    server {
        listen 80;
        server_name example.com www.example.com;
        location / {
            root /var/www;
        }
    }
}
"""


@pytest.fixture
def sample_config() -> str:
    """A small but complete nginx-style configuration."""
    return SAMPLE_CONFIG


@pytest.fixture
def lenient() -> ParserOptions:
    """Options that drop truncated input instead of raising."""
    return ParserOptions(strict=False)
