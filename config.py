"""Settings for the Boya course selection tool, read from the environment / .env."""

import os

from dotenv import load_dotenv

load_dotenv()

# SSO (CAS) login page and the program's CAS entry point that hands out the token
SSO_URL = os.getenv("BOYA_SSO_URL", "https://sso.buaa.edu.cn/login")
LOGIN_URL = os.getenv(
    "BOYA_LOGIN_URL",
    "https://sso.buaa.edu.cn/login?service=https%3A%2F%2Fbykc.buaa.edu.cn%2Fsscv%2Fcas%2Flogin",
)
API_BASE = os.getenv("BOYA_API_BASE", "https://bykc.buaa.edu.cn/sscv/")

# Window boundaries reported by the server are local times in this zone
TIMEZONE = os.getenv("BOYA_TIMEZONE", "Asia/Shanghai")
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

CONFIG_FILE = os.getenv("BOYA_CONFIG_FILE", "buaa-boya-config.json")
COOKIE_FILE = os.getenv("BOYA_COOKIE_FILE", "buaa-boya-cookie.json")

PAGE_SIZE = int(os.getenv("BOYA_PAGE_SIZE", "200"))
HTTP_TIMEOUT = float(os.getenv("BOYA_HTTP_TIMEOUT", "10"))
USER_AGENT = "Mozilla/5.0"
