"""
System Proxy Discovery.

google-genai talks to the API through httpx, which honours HTTP_PROXY /
HTTPS_PROXY from the environment. Desktop hosts that launch MCP servers
often do not forward those variables, so at startup we look up the OS
proxy configuration and export it:

    macOS:   ``scutil --proxy``
    Linux:   GNOME ``gsettings`` (manual mode only)
    Windows: Internet Settings registry key

An explicitly set HTTPS_PROXY/HTTP_PROXY always wins and nothing is
queried. Discovery problems are logged and ignored.
"""
from __future__ import annotations

import os
import re
import subprocess
import sys
from typing import Callable, Dict, MutableMapping, Optional

from gemini_tts_mcp.core.logging import get_logger, info, verbose, warn

_LOG = get_logger("gemini-tts-mcp.proxy")

_WIN_INTERNET_SETTINGS = r"HKEY_CURRENT_USER\Software\Microsoft\Windows\CurrentVersion\Internet Settings"

Runner = Callable[[list], str]


def _run(cmd: list) -> str:
    return subprocess.run(cmd, capture_output=True, text=True, check=True, timeout=5).stdout


def parse_scutil_output(output: str) -> Dict[str, str]:
    """
    Parse ``scutil --proxy`` output into a flat key -> value dict.

    Example input:
        <dictionary> {
          HTTPEnable : 1
          HTTPPort : 8080
          HTTPProxy : proxy.local
        }
    """
    settings: Dict[str, str] = {}
    for line in output.strip().splitlines():
        match = re.match(r"\s*(\w+)\s*:\s*(.*)", line)
        if match:
            settings[match.group(1)] = match.group(2).strip()
    return settings


def _proxies_from_scutil(settings: Dict[str, str]) -> Dict[str, str]:
    found: Dict[str, str] = {}
    for prefix, scheme, env_key in (
        ("HTTP", "http", "HTTP_PROXY"),
        ("HTTPS", "http", "HTTPS_PROXY"),
        ("SOCKS", "socks", "SOCKS_PROXY"),
    ):
        if settings.get(f"{prefix}Enable") == "1" and settings.get(f"{prefix}Proxy") and settings.get(f"{prefix}Port"):
            found[env_key] = f"{scheme}://{settings[prefix + 'Proxy']}:{settings[prefix + 'Port']}"
    return found


def _proxies_from_gsettings(run: Runner) -> Dict[str, str]:
    mode = run(["gsettings", "get", "org.gnome.system.proxy", "mode"])
    if "manual" not in mode:
        return {}
    host = run(["gsettings", "get", "org.gnome.system.proxy.http", "host"]).replace("'", "").strip()
    port = run(["gsettings", "get", "org.gnome.system.proxy.http", "port"]).strip()
    if not host or port in ("", "0"):
        return {}
    url = f"http://{host}:{port}"
    return {"HTTP_PROXY": url, "HTTPS_PROXY": url}


def _proxies_from_registry(run: Runner) -> Dict[str, str]:
    enabled = run(["reg", "query", _WIN_INTERNET_SETTINGS, "/v", "ProxyEnable"])
    if "0x1" not in enabled:
        return {}
    server = run(["reg", "query", _WIN_INTERNET_SETTINGS, "/v", "ProxyServer"])
    match = re.search(r"ProxyServer\s+REG_SZ\s+(.*)", server)
    if not match:
        return {}
    value = match.group(1).strip()

    # either "host:port" or "http=host:port;https=host:port"
    if "=" not in value:
        url = value if "://" in value else f"http://{value}"
        return {"HTTP_PROXY": url, "HTTPS_PROXY": url}
    found: Dict[str, str] = {}
    for item in value.split(";"):
        scheme, _, address = item.partition("=")
        if scheme.lower() in ("http", "https") and address:
            found[f"{scheme.upper()}_PROXY"] = f"http://{address}"
    return found


def discover_system_proxies(platform: Optional[str] = None, run: Runner = _run) -> Dict[str, str]:
    """
    Query the OS proxy configuration.

    Returns:
        Mapping of environment variable name -> proxy URL; empty if no
        proxy is configured or the platform tool is unavailable.
    """
    platform = platform or sys.platform
    try:
        if platform == "darwin":
            return _proxies_from_scutil(parse_scutil_output(run(["scutil", "--proxy"])))
        if platform == "win32":
            return _proxies_from_registry(run)
        return _proxies_from_gsettings(run)
    except (OSError, subprocess.SubprocessError) as e:
        verbose(_LOG, "proxy_discovery_unavailable", platform=platform, error=str(e))
        return {}


def apply_proxy_environment(
    env: Optional[MutableMapping[str, str]] = None,
    platform: Optional[str] = None,
    run: Runner = _run,
) -> Optional[str]:
    """
    Make sure the upstream client sees the system proxy.

    Args:
        env: Environment to update (defaults to os.environ).
        platform: Override sys.platform (tests).
        run: Command runner returning stdout (tests).

    Returns:
        The proxy URL now in effect for HTTPS traffic, or None.
    """
    env = os.environ if env is None else env

    preset = env.get("HTTPS_PROXY") or env.get("HTTP_PROXY")
    if preset:
        info(_LOG, "proxy_from_env", proxy=preset)
        return preset

    try:
        found = discover_system_proxies(platform, run)
    except Exception as e:  # startup must never fail on proxy lookup
        warn(_LOG, "proxy_discovery_failed", error=str(e))
        return None

    for key, url in found.items():
        env[key] = url
        env[key.lower()] = url

    proxy = env.get("HTTPS_PROXY") or env.get("HTTP_PROXY")
    if proxy:
        info(_LOG, "proxy_from_system", proxy=proxy)
    return proxy
