"""
asyncio probe engine, same contract as ``probe.probe_all``.

Bounded by an ``asyncio.Semaphore``; each HEAD runs under its own
``async_timeout`` deadline.
"""

import asyncio
from typing import List, Optional, Sequence

import aiohttp
import async_timeout

from .models import TRANSPORT_FAILURE, LinkRecord, ProbeResult
from .probe import ProgressCallback, is_working_status, log_result


async def probe_link(session: aiohttp.ClientSession, record: LinkRecord, timeout: float,
                     keep_server_errors: bool = False, max_redirects: int = 30) -> ProbeResult:
    try:
        async with async_timeout.timeout(timeout):
            async with session.head(record.url, allow_redirects=True, max_redirects=max_redirects) as resp:
                status = resp.status
    except asyncio.TimeoutError:
        return ProbeResult(record, False, TRANSPORT_FAILURE, "Timeout")
    except aiohttp.TooManyRedirects:
        return ProbeResult(record, False, TRANSPORT_FAILURE, "Too many redirects")
    except aiohttp.ClientSSLError as e:
        return ProbeResult(record, False, TRANSPORT_FAILURE, f"TLS error: {str(e)[:100]}")
    except aiohttp.ClientConnectionError as e:
        return ProbeResult(record, False, TRANSPORT_FAILURE, f"Connection failed: {str(e)[:100]}")
    except aiohttp.ClientError as e:
        return ProbeResult(record, False, TRANSPORT_FAILURE, f"{type(e).__name__}: {str(e)[:100]}")
    return ProbeResult(record, is_working_status(status, keep_server_errors), status)


async def probe_all_async(records: Sequence[LinkRecord], concurrency: int, timeout: float, user_agent: str,
                          keep_server_errors: bool = False, max_redirects: int = 30,
                          on_result: Optional[ProgressCallback] = None) -> List[ProbeResult]:
    total = len(records)
    results: List[Optional[ProbeResult]] = [None] * total
    if not total:
        return []

    sem = asyncio.Semaphore(concurrency)
    done = 0

    async def check(record):
        nonlocal done
        async with sem:
            try:
                result = await probe_link(session, record, timeout, keep_server_errors, max_redirects)
            except Exception as e:
                result = ProbeResult(record, False, TRANSPORT_FAILURE, f"{type(e).__name__}: {str(e)[:100]}")
        results[record.original_index] = result
        done += 1
        log_result(result)
        if on_result:
            on_result(done, total, result)

    connector = aiohttp.TCPConnector(limit=concurrency)
    headers = {"User-Agent": user_agent, "Accept": "*/*"}
    async with aiohttp.ClientSession(connector=connector, headers=headers) as session:
        await asyncio.gather(*(check(record) for record in records))

    return results


def probe_all(records: Sequence[LinkRecord], concurrency: int, timeout: float, user_agent: str,
              keep_server_errors: bool = False, max_redirects: int = 30,
              on_result: Optional[ProgressCallback] = None) -> List[ProbeResult]:
    return asyncio.run(probe_all_async(records, concurrency, timeout, user_agent,
                                       keep_server_errors, max_redirects, on_result))
