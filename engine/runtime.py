import os
import sys

from fastapi import __version__ as fastapi_version


def get_runtime_info(app_version=None):
    return {
        "app_version": app_version or os.environ.get("APP_VERSION", "0.0.0"),
        "python_version": sys.version.split()[0],
        "fastapi_version": fastapi_version,
    }
