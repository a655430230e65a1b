#!/usr/bin/env python3
"""Benchmark Runner for recordio.

Writes a batch of identical records through a RecordWriter, reads them back
with a RecordReader, checks every record, and reports timings in JSON.

Usage:
    python -m benchmarks.runner [--count N] [--payload-size BYTES] [--runs N]
                                [--transport memory|file|http] [--output FILE]

Options:
    --count N            Records per run (default: 10000)
    --payload-size N     Bytes per record (default: 5)
    --runs N             Number of benchmark runs (default: 3)
    --transport NAME     Stream to write to and read from (default: memory)
    --output FILE        Output JSON file (default: benchmark_output.json)

The http transport serves records through aiohttp, which ships with the
"test" extra (pip install -e ".[test]").
"""

from __future__ import annotations

import argparse
import asyncio
import json
import tempfile
import time
import tracemalloc
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from statistics import mean, stdev

import httpx

from recordio import (
    FileStream,
    FileStreamConfig,
    HttpBodyStream,
    MemoryStream,
    ReadableStream,
    RecordReader,
    RecordWriter,
    WritableStream,
)

TRANSPORTS = ("memory", "file", "http")


@dataclass(frozen=True, slots=True)
class RunResult:
    """Timings for a single write-then-read pass.

    Attributes:
        records: Number of records written and read.
        stream_bytes: Size of the encoded stream.
        write_time: Seconds spent writing.
        read_time: Seconds spent reading.
        peak_memory_mb: Peak traced memory in megabytes.
    """

    records: int
    stream_bytes: int
    write_time: float
    read_time: float
    peak_memory_mb: float

    @property
    def write_rps(self) -> float:
        return self.records / self.write_time if self.write_time > 0 else 0.0

    @property
    def read_rps(self) -> float:
        return self.records / self.read_time if self.read_time > 0 else 0.0


async def write_records(stream: WritableStream, payload: bytes, count: int) -> tuple[int, float]:
    """Write count copies of payload. Returns bytes written and elapsed seconds."""
    start = time.perf_counter()
    async with RecordWriter(stream) as writer:
        for _ in range(count):
            await writer.write(payload)
    return writer.bytes_written, time.perf_counter() - start


async def read_records(stream: ReadableStream, payload: bytes, count: int) -> float:
    """Read count records back, checking each one. Returns elapsed seconds."""
    start = time.perf_counter()
    reader = RecordReader(stream)
    for i in range(count):
        record = await reader.read_record()
        if record != payload:
            raise AssertionError(f"Record {i} mismatched: got {len(record)} bytes")
    await reader.close()
    return time.perf_counter() - start


async def run_once(transport: str, payload: bytes, count: int, workdir: Path) -> RunResult:
    """Run one write/read pass over the chosen transport."""
    tracemalloc.start()
    try:
        if transport == "memory":
            stream = MemoryStream()
            stream_bytes, write_time = await write_records(stream, payload, count)
            # Closing the writer rewound the stream.
            read_time = await read_records(stream, payload, count)
        elif transport == "file":
            path = workdir / "bench.rec"
            stream_bytes, write_time = await write_records(
                FileStream(FileStreamConfig(path, mode="wb")), payload, count
            )
            read_time = await read_records(FileStream(FileStreamConfig(path)), payload, count)
        else:
            from benchmarks.record_server import RecordServer, RecordServerConfig

            memory = MemoryStream()
            stream_bytes, write_time = await write_records(memory, payload, count)
            async with RecordServer(RecordServerConfig(chunk_size=64 * 1024)) as server:
                url = server.publish("bench", memory.getvalue())
                async with httpx.AsyncClient(trust_env=False) as client:
                    body = await HttpBodyStream.open(client, url)
                    read_time = await read_records(body, payload, count)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()

    return RunResult(
        records=count,
        stream_bytes=stream_bytes,
        write_time=write_time,
        read_time=read_time,
        peak_memory_mb=peak / (1024 * 1024),
    )


def calculate_stats(results: list[RunResult]) -> dict:
    """Calculate aggregate statistics from benchmark runs.

    Args:
        results: List of RunResult objects.

    Returns:
        Dictionary with aggregate statistics.
    """
    write_rps = [r.write_rps for r in results]
    read_rps = [r.read_rps for r in results]

    return {
        "runs": len(results),
        "records_per_run": results[0].records if results else 0,
        "stream_bytes": results[0].stream_bytes if results else 0,
        "peak_memory_mb": max((r.peak_memory_mb for r in results), default=0),
        "write_rps": {
            "mean": mean(write_rps) if write_rps else 0,
            "std_dev": stdev(write_rps) if len(write_rps) > 1 else 0,
        },
        "read_rps": {
            "mean": mean(read_rps) if read_rps else 0,
            "std_dev": stdev(read_rps) if len(read_rps) > 1 else 0,
        },
    }


async def run_benchmark(transport: str, payload_size: int, count: int, runs: int = 3) -> dict:
    """Run the benchmark several times for one transport.

    Returns:
        Dictionary with per-run results and aggregate statistics.
    """
    print(f"Running {transport} benchmark ({runs} runs, {count} records)...")
    payload = b"H" * payload_size
    results: list[RunResult] = []

    with tempfile.TemporaryDirectory() as tmpdir:
        for i in range(runs):
            print(f"  Run {i + 1}/{runs}...", end=" ", flush=True)
            result = await run_once(transport, payload, count, Path(tmpdir))
            results.append(result)
            print(f"write {result.write_time:.3f}s, read {result.read_time:.3f}s")

    return {
        "transport": transport,
        "payload_size": payload_size,
        "results": [asdict(r) for r in results],
        "stats": calculate_stats(results),
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark record writing and reading")
    parser.add_argument("--count", type=int, default=10000, help="Records per run")
    parser.add_argument("--payload-size", type=int, default=5, help="Bytes per record")
    parser.add_argument("--runs", type=int, default=3, help="Number of runs")
    parser.add_argument("--transport", choices=TRANSPORTS, default="memory")
    parser.add_argument("--output", default="benchmark_output.json", help="Output JSON file")
    args = parser.parse_args()

    report = asyncio.run(run_benchmark(args.transport, args.payload_size, args.count, args.runs))
    report["timestamp"] = datetime.now().isoformat()

    output_path = Path(args.output)
    output_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    print(f"Results written to {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
