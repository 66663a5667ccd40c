#!/usr/bin/env python3
"""
JobSeeker Command Line Interface

Usage:
    jobseeker init --email me@example.com --name "Jane Doe"
    jobseeker scan [--config config/job_boards.json] [--delay-ms 2000]
    jobseeker list [--status discovered] [--type contract] [--limit 10]
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from jobseeker import __version__
from jobseeker.core.config import Settings, get_settings, load_job_boards_config
from jobseeker.core.database import DatabaseManager, init_db
from jobseeker.core.exceptions import ConfigurationError, JobSeekerError, UserNotFoundError
from jobseeker.repositories import JobRepository, UserRepository
from jobseeker.scrapers import JobStatus, JobType, PoliteFetcher, default_domain_groups
from jobseeker.services import JobService, ScanService
from jobseeker.utils.logger import configure_logging, get_logger, log_error

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobseeker", description="Job board scanner")
    parser.add_argument("--database", help="Database URL (default: DATABASE_URL)")
    parser.add_argument("--email", help="User email (default: USER_EMAIL)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Create the database and register a user")
    init_parser.add_argument("--name", help="User name (default: USER_NAME)")
    init_parser.add_argument("--location", help="Preferred location")

    scan_parser = subparsers.add_parser("scan", help="Scan job boards for new opportunities")
    scan_parser.add_argument("--config", help="Job boards config file (default: JOB_BOARDS_CONFIG)")
    scan_parser.add_argument("--delay-ms", type=int, help="Delay between requests in milliseconds")

    list_parser = subparsers.add_parser("list", help="List jobs from the database")
    list_parser.add_argument(
        "--status", "-s",
        choices=[s.value for s in JobStatus],
        help="Filter by status",
    )
    list_parser.add_argument(
        "--type", "-t",
        dest="job_type",
        choices=[t.value for t in JobType],
        help="Filter by job type",
    )
    list_parser.add_argument("--recommended", "-r", action="store_true", help="Show only recommended jobs")
    list_parser.add_argument("--contract", action="store_true", help="Show only contract roles")
    list_parser.add_argument("--limit", "-l", type=int, default=10, help="Maximum number of jobs to show")

    return parser


def _require_email(args: argparse.Namespace, settings: Settings) -> str:
    email = args.email or settings.USER_EMAIL
    if not email:
        raise ConfigurationError("USER_EMAIL not set; pass --email or set it in the environment")
    return email


async def run_init(args: argparse.Namespace, settings: Settings, db_manager: DatabaseManager) -> int:
    email = _require_email(args, settings)
    user = await UserRepository(db_manager).get_or_create(
        email,
        name=args.name or settings.USER_NAME,
        location=args.location,
    )
    print(f"✓ Initialized user: {user.name or '-'} ({user.email})")
    return 0


async def run_scan(args: argparse.Namespace, settings: Settings, db_manager: DatabaseManager) -> int:
    email = _require_email(args, settings)
    user = await UserRepository(db_manager).get_by_email(email)
    print(f"Scanning for user: {user.name or '-'} ({user.email})")

    job_boards = load_job_boards_config(args.config)
    if args.delay_ms is not None:
        delay = max(args.delay_ms, 0) / 1000.0
    else:
        delay = settings.scraper_delay_seconds
    groups = default_domain_groups(delay=delay, overrides=job_boards.group_overrides())

    async with PoliteFetcher(groups, timeout_seconds=settings.REQUEST_TIMEOUT_SECONDS) as fetcher:
        scanner = ScanService(fetcher, JobService(JobRepository(db_manager)), user.id)
        report = await scanner.scan(job_boards)

    if not report.sources:
        print("No job boards enabled")

    for summary in report.sources.values():
        print(
            f"  {summary.source}: {summary.jobs_found} found, {summary.saved} new, "
            f"{summary.skipped} skipped ({summary.urls_failed}/{summary.urls_scanned} URLs failed)"
        )

    print(f"\n✓ Scan complete! Found {report.total_found} total jobs ({report.total_saved} new)")
    return 0


async def run_list(args: argparse.Namespace, settings: Settings, db_manager: DatabaseManager) -> int:
    email = _require_email(args, settings)
    user = await UserRepository(db_manager).get_by_email(email)

    status = JobStatus.RECOMMENDED.value if args.recommended else args.status
    job_type = JobType.CONTRACT.value if args.contract else args.job_type

    repository = JobRepository(db_manager)
    jobs = await repository.list_for_user(
        user.id, status=status, job_type=job_type, limit=args.limit
    )

    if not jobs:
        print("No jobs found")
        return 0

    total = await repository.count({"user_id": user.id, "status": status, "job_type": job_type})
    print(f"Showing {len(jobs)} of {total} jobs:\n")
    for i, job in enumerate(jobs, start=1):
        print(f"{i}. {job.title}")
        print(f"   Company: {job.company} | Location: {job.location} | Type: {job.job_type}")
        if job.salary:
            print(f"   Rate/Salary: {job.salary}")
        line = f"   Status: {job.status}"
        if job.is_analyzed and job.match_score is not None:
            line += f" | Match Score: {job.match_score}/100"
        print(line)
        print(f"   URL: {job.url}\n")

    return 0


COMMANDS = {
    "init": run_init,
    "scan": run_scan,
    "list": run_list,
}


async def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run a command."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    logger.debug("Starting command", app=settings.APP_NAME, command=args.command)

    db_manager = await init_db(args.database or settings.DATABASE_URL, echo=settings.DEBUG)
    try:
        return await COMMANDS[args.command](args, settings, db_manager)
    except UserNotFoundError as e:
        print(f"{e.message}\nRun 'jobseeker init' first", file=sys.stderr)
        return 1
    except JobSeekerError as e:
        log_error(e, context={"command": args.command, **e.details}, category=e.category.value)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        await db_manager.close_connections()


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
