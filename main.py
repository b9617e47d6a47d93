import json
import logging
import argparse

from tenacity import retry, stop_after_attempt, wait_fixed, before_sleep_log

from core.app_context import AppContext
from core.config_loader import load_config
from database.database import create_db_engine, create_session_factory, init_db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@retry(stop=stop_after_attempt(5), wait=wait_fixed(3),
       before_sleep=before_sleep_log(logger, logging.WARNING), reraise=True)
def init_db_with_retry(engine):
    """Create tables, waiting for the database to accept connections."""
    init_db(engine)


def build_context(config):
    engine = create_db_engine(config.database.url, echo=config.database.echo)
    # Work triggered from the command line completes before exit
    config.queue.run_inline = True
    return AppContext.build(config, session_factory=create_session_factory(engine)), engine


def cmd_init_db(config, args):
    engine = create_db_engine(config.database.url, echo=config.database.echo)
    init_db_with_retry(engine)
    return 0


def cmd_match_job(config, args):
    ctx, _ = build_context(config)
    result = ctx.matcher.match_job_to_candidates(args.job_id)
    logger.info(f"Matched {result.matched_candidates}/{result.total_candidates} candidates")
    for match in result.matches[:args.top]:
        logger.info(f"  {match.match_score:>3}  user={match.user_id}  {match.match_reason}")
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def cmd_rescore_application(config, args):
    ctx, _ = build_context(config)
    outcome = ctx.orchestrator.score_application(args.application_id)
    print(json.dumps(outcome.to_dict(), indent=2))
    return 0 if outcome.status == 'scored' else 1


def cmd_serve(config, args):
    import uvicorn

    host = args.host or config.web.host
    port = args.port or config.web.port
    logger.info(f"Starting TalentScout API on {host}:{port}")
    uvicorn.run("web.backend.app:app", host=host, port=port, reload=False, log_level="info")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="TalentScout command line")
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config.yaml')
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init-db', help='Create database tables')

    match_parser = subparsers.add_parser('match-job', help='Match a job against all candidates')
    match_parser.add_argument('job_id')
    match_parser.add_argument('--top', type=int, default=10, help='Matches to log')

    rescore_parser = subparsers.add_parser('rescore-application', help='Score an application now')
    rescore_parser.add_argument('application_id')

    serve_parser = subparsers.add_parser('serve', help='Run the HTTP API')
    serve_parser.add_argument('--host', type=str, default=None)
    serve_parser.add_argument('--port', type=int, default=None)

    args = parser.parse_args(argv)
    config = load_config(args.config)

    commands = {
        'init-db': cmd_init_db,
        'match-job': cmd_match_job,
        'rescore-application': cmd_rescore_application,
        'serve': cmd_serve,
    }
    return commands[args.command](config, args)


if __name__ == "__main__":
    raise SystemExit(main())
