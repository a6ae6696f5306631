#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
header_checker.py — HTTP response header checker (v1.0.0)

Fetches https://<domain> once per domain and sorts the response header names
into four buckets using plain-text reference lists:
  - missing      entries of files/missing.txt the response does not send
  - insecure     response headers listed in files/insecure.txt
  - security     response headers listed in files/security.txt
  - fingerprint  response headers listed in files/fingerprint.txt

Findings are printed colour-coded per domain and summarised in a CSV.

Usage (examples):
  python3 header_checker.py                       # prompts for a domain file or domains
  python3 header_checker.py --in domains.txt --out results.csv
  python3 header_checker.py --in domains.txt --missing my_required.txt --debug

List files:
  one header name per line, case-insensitive; blank lines and lines starting
  with '#' are ignored.

Output CSV columns:
  URL, Missing Headers, Insecure Headers, Security Headers, Fingerprint Headers
  (multi-value cells are joined with "; ")

Deps:
  pip3 install httpx colorama
"""

import argparse
import csv
import logging
import sys
import time
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Sequence

import httpx
from colorama import Fore, Style, init

VERSION = "v1.0.0"

LOG = logging.getLogger("header_checker")

# ---------- config / constants ----------

MISSING_HEADERS_FILE = "files/missing.txt"
INSECURE_HEADERS_FILE = "files/insecure.txt"
SECURITY_HEADERS_FILE = "files/security.txt"
FINGERPRINT_HEADERS_FILE = "files/fingerprint.txt"
OUTPUT_CSV = "header_analysis.csv"

TIMEOUT = 10.0
HOP_LIMIT = 10
FAILED_TO_CONNECT = "Failed to connect"

CSV_COLUMNS = ["URL", "Missing Headers", "Insecure Headers", "Security Headers", "Fingerprint Headers"]
CSV_SEPARATOR = "; "

# ---------- errors ----------

class HeaderCheckError(Exception):
    """Base class for fatal and reportable header checker failures."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class FileReadError(HeaderCheckError):
    pass


class FileWriteError(HeaderCheckError):
    pass

# ---------- model ----------

@dataclass
class ScanResult:
    domain: str
    missing: List[str] = field(default_factory=list)
    insecure: List[str] = field(default_factory=list)
    security: List[str] = field(default_factory=list)
    fingerprint: List[str] = field(default_factory=list)

    @property
    def connected(self) -> bool:
        return self.missing != [FAILED_TO_CONNECT]

    def csv_row(self) -> List[str]:
        return [
            self.domain,
            CSV_SEPARATOR.join(self.missing),
            CSV_SEPARATOR.join(self.insecure),
            CSV_SEPARATOR.join(self.security),
            CSV_SEPARATOR.join(self.fingerprint),
        ]


@dataclass(frozen=True)
class HeaderLists:
    missing: FrozenSet[str]
    insecure: FrozenSet[str]
    security: FrozenSet[str]
    fingerprint: FrozenSet[str]

# ---------- list / domain input ----------

def load_headers(path: str) -> FrozenSet[str]:
    """Read a header list file into a lower-cased set, skipping blanks and # comments."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            lines = fh.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(path, str(e)) from e

    headers = set()
    for line in lines:
        line = line.strip()
        if line and not line.startswith("#"):
            headers.add(line.lower())
    LOG.debug("Loaded %d headers from %s", len(headers), path)
    return frozenset(headers)


def load_header_lists(missing_path: str = MISSING_HEADERS_FILE,
                      insecure_path: str = INSECURE_HEADERS_FILE,
                      security_path: str = SECURITY_HEADERS_FILE,
                      fingerprint_path: str = FINGERPRINT_HEADERS_FILE) -> HeaderLists:
    # stops at the first list that fails; nothing is scanned without all four
    return HeaderLists(
        missing=load_headers(missing_path),
        insecure=load_headers(insecure_path),
        security=load_headers(security_path),
        fingerprint=load_headers(fingerprint_path),
    )


def read_domains_from_file(path: str) -> List[str]:
    domains: List[str] = []
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                domain = line.strip()
                if domain:
                    domains.append(domain)
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(path, str(e)) from e
    return domains


def parse_domain_input(text: str) -> List[str]:
    return (text or "").split()

# ---------- HTTP / classification ----------

def make_client(timeout: float = TIMEOUT) -> httpx.Client:
    # redirects are walked by hand in fetch_header_names so the deadline covers every hop
    return httpx.Client(follow_redirects=False, timeout=timeout)


def fetch_header_names(client: httpx.Client, url: str, timeout: float = TIMEOUT) -> List[str]:
    """
    GET url, following up to HOP_LIMIT redirects, and return the final
    response's header names. Bodies are never read. Every hop runs against
    one deadline; a response that arrives after it counts as a timeout.
    """
    deadline = time.monotonic() + timeout
    for _ in range(HOP_LIMIT + 1):
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise httpx.TimeoutException(f"no response within {timeout:.0f}s")
        client.cookies.clear()
        with client.stream("GET", url, timeout=remaining) as r:
            if time.monotonic() > deadline:
                raise httpx.TimeoutException(f"no response within {timeout:.0f}s", request=r.request)
            if not r.is_redirect:
                LOG.debug("GET %s -> %s", url, r.status_code)
                return response_header_names(r)
            nxt = r.url.join(r.headers["location"])
            LOG.debug("GET %s -> %s %s", url, r.status_code, nxt)
            url = nxt
    raise httpx.TooManyRedirects(f"stopped after {HOP_LIMIT} redirects")


def response_header_names(response: httpx.Response) -> List[str]:
    """Header names as the server sent them, first occurrence of each name only."""
    names: List[str] = []
    seen = set()
    for raw_key, _ in response.headers.raw:
        name = raw_key.decode(response.headers.encoding)
        if name.lower() in seen:
            continue
        seen.add(name.lower())
        names.append(name)
    return names


def classify_headers(domain: str, header_names: Iterable[str],
                     missing_headers: FrozenSet[str], insecure_headers: FrozenSet[str],
                     security_headers: FrozenSet[str], fingerprint_headers: FrozenSet[str]) -> ScanResult:
    names = list(header_names)
    found = {n.lower() for n in names}
    return ScanResult(
        domain=domain,
        missing=sorted(h for h in missing_headers if h.lower() not in found),
        insecure=[n for n in names if n.lower() in insecure_headers],
        security=[n for n in names if n.lower() in security_headers],
        fingerprint=[n for n in names if n.lower() in fingerprint_headers],
    )


def analyze_headers(domain: str,
                    missing_headers: FrozenSet[str], insecure_headers: FrozenSet[str],
                    security_headers: FrozenSet[str], fingerprint_headers: FrozenSet[str],
                    client: Optional[httpx.Client] = None) -> ScanResult:
    """
    GET https://<domain> once and classify the response headers.
    A connection/timeout failure returns a result whose missing list is
    ["Failed to connect"]; it never raises.
    Without a client a fresh one is opened and closed for this domain only.
    """
    url = f"https://{domain}"
    own_client = client is None
    if own_client:
        client = make_client()
    try:
        names = fetch_header_names(client, url)
    except (httpx.RequestError, httpx.InvalidURL) as e:
        LOG.debug("GET %s failed: %s", url, e)
        return ScanResult(domain=domain, missing=[FAILED_TO_CONNECT])
    finally:
        if own_client:
            client.close()

    LOG.debug("%s: %d headers", domain, len(names))
    return classify_headers(domain, names, missing_headers, insecure_headers,
                            security_headers, fingerprint_headers)

# ---------- terminal output ----------

def display_results(res: ScanResult):
    print(f"\n🔎 Scanning: {Fore.CYAN}{res.domain}{Style.RESET_ALL}")

    print(f"🟢 Security Headers Found: {Fore.GREEN}{', '.join(res.security)}{Style.RESET_ALL}")

    if res.missing:
        print(f"🟡 Missing Headers: {Fore.YELLOW}{', '.join(res.missing)}{Style.RESET_ALL}")
    else:
        print("✅ No missing headers!")

    if res.insecure:
        print(f"🔴 Insecure Headers: {Fore.RED}{', '.join(res.insecure)}{Style.RESET_ALL}")
    else:
        print("✅ No insecure headers detected.")

    if res.fingerprint:
        print(f"🔍 Technologies Detected (Fingerprint): {Fore.BLUE}{', '.join(res.fingerprint)}{Style.RESET_ALL}")


def print_error(msg: str):
    print(f"{Fore.RED}{msg}{Style.RESET_ALL}")


def print_ok(msg: str):
    print(f"{Fore.GREEN}{msg}{Style.RESET_ALL}")

# ---------- CSV output ----------

def write_results_csv(path: str, results: Sequence[ScanResult]):
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(CSV_COLUMNS)
            for res in results:
                w.writerow(res.csv_row())
    except OSError as e:
        raise FileWriteError(path, str(e)) from e

# ---------- main ----------

def scan_domains(domains: Sequence[str], lists: HeaderLists) -> List[ScanResult]:
    # one client per domain: no cookies or pooled connections carry over between domains
    results: List[ScanResult] = []
    for domain in domains:
        res = analyze_headers(domain, lists.missing, lists.insecure, lists.security, lists.fingerprint)
        if not res.connected:
            LOG.debug("%s unreachable", domain)
        display_results(res)
        results.append(res)
    failed = sum(1 for r in results if not r.connected)
    if failed:
        LOG.info("%d of %d domains could not be reached", failed, len(results))
    return results


def prompt_domains(infile: Optional[str]) -> List[str]:
    if infile is None:
        infile = input("📄 Enter domain file name (or press ENTER for manual input): ").strip()

    if infile:
        domains = read_domains_from_file(infile)
        print_ok(f"✅ Loaded {len(domains)} domains from file.")
        return domains

    return parse_domain_input(input("📝 Enter domains/subdomains (space-separated): "))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description=f"HTTP Header Checker {VERSION}")
    ap.add_argument("--in", dest="infile", help="Domain file, one domain per line (skips the prompt)")
    ap.add_argument("--out", dest="outfile", default=OUTPUT_CSV, help=f"CSV output path (default {OUTPUT_CSV})")
    ap.add_argument("--missing", default=MISSING_HEADERS_FILE, help="Required headers list")
    ap.add_argument("--insecure-list", dest="insecure", default=INSECURE_HEADERS_FILE, help="Insecure headers list")
    ap.add_argument("--security", default=SECURITY_HEADERS_FILE, help="Security headers list")
    ap.add_argument("--fingerprint", default=FINGERPRINT_HEADERS_FILE, help="Fingerprint headers list")
    ap.add_argument("--debug", action="store_true", help="Verbose debug logging")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format="%(levelname)s: %(message)s")
    if not args.debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

    init(autoreset=True)
    print(f"[Header Checker] {VERSION}")

    try:
        lists = load_header_lists(args.missing, args.insecure, args.security, args.fingerprint)
    except FileReadError as e:
        print_error(f"Error loading {e.path}: {e.reason}")
        return 2

    try:
        domains = prompt_domains(args.infile)
    except FileReadError as e:
        print_error(f"Error reading file: {e.reason}")
        return 2
    except (KeyboardInterrupt, EOFError):
        print_error("\nAborted.")
        return 130

    if not domains:
        LOG.warning("No domains given; writing an empty report.")

    try:
        results = scan_domains(domains, lists)
    except KeyboardInterrupt:
        print_error("\nAborted.")
        return 130

    try:
        write_results_csv(args.outfile, results)
    except FileWriteError as e:
        print_error(f"Error saving CSV: {e.reason}")
    else:
        print_ok(f"📄 Results saved in '{args.outfile}'")
    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
