#!/usr/bin/env python3
"""
RQ worker for application scoring and job matching tasks.

The task context (database engine, LLM client, services) is built once
before the first job is taken, so a broken configuration fails the worker
at startup instead of failing every task.

Usage:
    python -m pipeline.worker
    python -m pipeline.worker --burst --config config.yaml
"""

import argparse
import logging
import sys
from typing import List, Optional
from urllib.parse import urlparse

from redis import Redis
from rq import Worker

from core.config_loader import AppConfig, load_config
from pipeline import tasks

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def redacted(redis_url: str) -> str:
    """Redis URL with any password replaced, for log output."""
    parsed = urlparse(redis_url)
    if not parsed.password:
        return redis_url
    return parsed._replace(netloc=parsed.netloc.replace(f":{parsed.password}@", ":***@")).geturl()


def run_worker(config: AppConfig, queues: List[str], burst: bool = False) -> int:
    logger.info(f"Connecting to {redacted(config.queue.redis_url)}; queues: {', '.join(queues)}")
    redis_conn = Redis.from_url(config.queue.redis_url)
    redis_conn.ping()

    tasks.warm_worker_context(config)

    worker = Worker(queues, connection=redis_conn)
    logger.info("Worker draining queues and exiting" if burst else "Worker started. Press Ctrl+C to stop.")
    worker.work(burst=burst)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='TalentScout task worker')
    parser.add_argument('--config', default='config.yaml', help='Path to config.yaml')
    parser.add_argument('--burst', action='store_true', help='Process queued tasks and exit')
    parser.add_argument('--queues', nargs='+', default=None, help='Queue names (default: queue.name)')
    parser.add_argument('--verbose', action='store_true')
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = load_config(args.config)
    try:
        return run_worker(config, args.queues or [config.queue.name], burst=args.burst)
    except KeyboardInterrupt:
        logger.info("Worker stopped")
        return 0
    except Exception as e:
        logger.error(f"Worker failed: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
