"""Root conftest — shared test configuration."""

import os

# portfolio.main builds a module-level app at import; keep it off real dirs
os.environ.setdefault("DATA_DIR", "/tmp/study-portfolio-test/data")
os.environ.setdefault("LOGS_DIR", "/tmp/study-portfolio-test/logs")
os.environ.setdefault("LOG_FORMAT", "text")
