"""
Thread-pool probe engine.

Every link gets exactly one HEAD request (redirects followed, no retries).
At most ``concurrency`` requests are in flight; each worker writes its own
slot of a results list allocated up front, indexed by ``original_index``.
"""

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional, Sequence
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .log import get_logger
from .models import TRANSPORT_FAILURE, LinkRecord, ProbeResult

log = get_logger(__name__)

ProgressCallback = Callable[[int, int, ProbeResult], None]


def is_working_status(status_code: int, keep_server_errors: bool = False) -> bool:
    if 200 <= status_code < 400:
        return True
    if keep_server_errors and 500 <= status_code < 600:
        return True
    return False


def log_result(result: ProbeResult):
    url = result.record.url
    if result.is_working:
        log.debug(f"  [✓] {result.status_code} {url}")
    elif result.transport_failed:
        log.debug(f"  [⏱] {result.error_detail}: {url}")
    else:
        log.debug(f"  [✗] {result.status_code} {url}")


def make_session(user_agent: str, concurrency: int) -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent, "Accept": "*/*"})
    # one attempt per URL; redirects are followed by probe_link
    adapter = HTTPAdapter(
        pool_connections=concurrency,
        pool_maxsize=concurrency,
        max_retries=Retry(total=0, read=False, redirect=False),
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def probe_link(session: requests.Session, record: LinkRecord, timeout: float,
               keep_server_errors: bool = False, max_redirects: int = 30) -> ProbeResult:
    """
    HEAD the link, following redirects hop by hop. ``timeout`` bounds the
    whole chain, not each request.
    """
    deadline = time.monotonic() + timeout
    url = record.url
    hops = 0
    try:
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return ProbeResult(record, False, TRANSPORT_FAILURE, "Timeout")
            with session.head(url, timeout=(remaining, remaining), allow_redirects=False) as r:
                status = r.status_code
                location = r.headers.get("Location") if r.is_redirect else None
            if time.monotonic() > deadline:
                return ProbeResult(record, False, TRANSPORT_FAILURE, "Timeout")
            if location is None:
                break
            hops += 1
            if hops > max_redirects:
                return ProbeResult(record, False, TRANSPORT_FAILURE, "Too many redirects")
            url = urljoin(url, location)
    except requests.exceptions.Timeout:
        return ProbeResult(record, False, TRANSPORT_FAILURE, "Timeout")
    except requests.exceptions.SSLError as e:
        return ProbeResult(record, False, TRANSPORT_FAILURE, f"TLS error: {str(e)[:100]}")
    except requests.exceptions.ConnectionError as e:
        return ProbeResult(record, False, TRANSPORT_FAILURE, f"Connection failed: {str(e)[:100]}")
    except requests.exceptions.RequestException as e:
        return ProbeResult(record, False, TRANSPORT_FAILURE, f"{type(e).__name__}: {str(e)[:100]}")
    return ProbeResult(record, is_working_status(status, keep_server_errors), status)


def probe_all(records: Sequence[LinkRecord], concurrency: int, timeout: float, user_agent: str,
              keep_server_errors: bool = False, max_redirects: int = 30,
              on_result: Optional[ProgressCallback] = None,
              session: Optional[requests.Session] = None) -> List[ProbeResult]:
    """
    Probe every record once and return the results in original order.
    """
    total = len(records)
    results: List[Optional[ProbeResult]] = [None] * total
    if not total:
        return []

    own_session = session is None
    if own_session:
        session = make_session(user_agent, concurrency)

    def work(record):
        try:
            result = probe_link(session, record, timeout, keep_server_errors, max_redirects)
        except Exception as e:
            result = ProbeResult(record, False, TRANSPORT_FAILURE, f"{type(e).__name__}: {str(e)[:100]}")
        results[record.original_index] = result
        return result

    executor = ThreadPoolExecutor(max_workers=concurrency, thread_name_prefix="probe")
    try:
        futures = [executor.submit(work, record) for record in records]
        done = 0
        for future in as_completed(futures):
            result = future.result()
            done += 1
            log_result(result)
            if on_result:
                on_result(done, total, result)
    except BaseException:
        # interrupted: drop queued probes, let in-flight ones run out their timeout
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    else:
        executor.shutdown(wait=True)
    finally:
        if own_session:
            session.close()

    return results
