"""s3r command line."""

import argparse
import logging
import signal
import sys
import threading

from s3_restore.errors import (
    ArgumentError,
    CommandNotImplemented,
    StorageError,
)
from s3_restore.restorer import restore
from s3_restore.selector import parse_timestamp
from s3_restore import storage

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def positive_int(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser():
    parser = argparse.ArgumentParser(
        prog='s3r',
        description='restore objects in a versioned bucket to a point in time',
        epilog='example: s3r restore --bucket my-bucket --timestamp 1622505600')
    parser.add_argument('--region', help='AWS region (default: from environment, '
                        f'else {storage.DEFAULT_REGION})')
    parser.add_argument('--profile', help='AWS credentials profile')
    parser.add_argument('--endpoint-url', help='custom S3 endpoint')
    parser.add_argument('--max-attempts', type=positive_int,
                        default=storage.DEFAULT_MAX_ATTEMPTS,
                        help='attempts per request for throttled or failed calls')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='debug logging')

    commands = parser.add_subparsers(dest='command', metavar='<command>')

    restore_parser = commands.add_parser('restore', help='Restore bucket objects')
    restore_parser.add_argument('--bucket', required=True,
                                help='Source bucket. Required.')
    restore_parser.add_argument('--timestamp', required=True,
                                help='Restore point in time in UNIX timestamp '
                                     'format. Required.')
    restore_parser.add_argument('--prefix', default='',
                                help='Object prefix. Default none.')
    restore_parser.add_argument('--continue-on-error', action='store_true',
                                help='keep going when a single object fails to '
                                     'restore and report failures at the end')
    restore_parser.set_defaults(handler=cmd_restore,
                                usage=restore_parser.print_usage)

    list_parser = commands.add_parser(
        'list', help='List object versions. Not implemented')
    list_parser.add_argument('--since', default='', help='Not implemented')
    list_parser.set_defaults(handler=cmd_list, usage=list_parser.print_usage)

    return parser


def cmd_restore(args):
    if not args.bucket:
        raise ArgumentError('--bucket must not be empty')
    restore_time = parse_timestamp(args.timestamp)

    client = storage.make_client(region=args.region, profile=args.profile,
                                 endpoint_url=args.endpoint_url,
                                 max_attempts=args.max_attempts)

    # Let the copy in flight finish on Ctrl-C, then stop.
    cancel = threading.Event()
    previous = signal.signal(signal.SIGINT, lambda signum, frame: cancel.set())
    try:
        report = restore(client, args.bucket, restore_time, prefix=args.prefix,
                         continue_on_error=args.continue_on_error,
                         cancel_event=cancel)
    finally:
        signal.signal(signal.SIGINT, previous)

    for target, _ in report.restored:
        print(f"Restored file {target.key} to: {target.version_id}")
    for target, error in report.failed:
        print(f"Failed to restore {target.key} to: {target.version_id} ({error})",
              file=sys.stderr)

    if report.cancelled:
        print(f"Cancelled at {report.stopped_at_key}; keys listed from there on "
              "were not processed", file=sys.stderr)
        return EXIT_INTERRUPTED
    return EXIT_OK if report.ok else EXIT_FAILURE


def cmd_list(args):
    print(args.since)
    raise CommandNotImplemented('list')


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr)

    if args.command is None:
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    try:
        return args.handler(args)
    except ArgumentError as e:
        args.usage(sys.stderr)
        print(f"s3r {args.command}: error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except StorageError as e:
        logger.error("%s", e)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED


if __name__ == '__main__':
    sys.exit(main())
