import argparse
import sys

from c2cs import logging as c2cs_logging, utils
from c2cs.bindgen import (BindgenError, BindgenRequest, check_config,
                          run_bindgen)
from c2cs.c_model import ModelValidationError

logger = c2cs_logging.get_logger(__name__)


def parse_bindgen(parser):
    parser.add_argument(
        'input_file',
        type=str,
        help='The JSON file describing the C declarations, as produced by the header front end'
    )

    parser.add_argument(
        '--output',
        '-o',
        type=str,
        dest='output_file',
        required=True,
        help='The C# file to write'
    )

    parser.add_argument(
        '--config',
        '-c',
        type=str,
        dest='config_file',
        help='The configuration file to use'
    )

    parser.add_argument(
        '--library-name',
        '-l',
        type=str,
        help='The native library name used in DllImport, default to the input file stem'
    )

    parser.add_argument(
        '--class-name',
        type=str,
        help='The static class holding the bindings, default to the library name'
    )

    parser.add_argument(
        '--namespace',
        '-n',
        type=str,
        help='Wrap the generated class in this namespace'
    )

    parser.add_argument(
        '--manifest',
        '-m',
        type=str,
        dest='manifest_file',
        help='Also write a JSON manifest listing every declared type and function'
    )

    parser.add_argument(
        '--on-error',
        choices=['abort', 'skip'],
        default=None,
        help='What to do with declarations that cannot be mapped, overrides bindgen.on_error'
    )

    parser.add_argument(
        '--jobs',
        '-j',
        type=int,
        default=None,
        help='Number of worker threads used to map declarations, overrides mapping.max_workers'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        help='Console log level, overrides logging.console_level'
    )

    parser.add_argument(
        '--log-dir',
        type=str,
        default=None,
        help='Directory for log files; file logging is off unless this or logging.dir is set'
    )


def _configure_logging_from_args(config, args):
    c2cs_logging.configure_logging(
        config,
        console_level_override=args.log_level,
        log_dir_override=args.log_dir,
    )


def bindgen(parser, args):
    if args.jobs is not None and args.jobs < 1:
        parser.error('--jobs must be at least 1')

    try:
        config = utils.try_load_config(args.config_file)
        if args.on_error is not None:
            config['bindgen']['on_error'] = args.on_error
        if args.jobs is not None:
            config['mapping']['max_workers'] = args.jobs
        check_config(config)
        _configure_logging_from_args(config, args)
    except (OSError, ValueError, TypeError) as exc:
        # TOMLDecodeError is a ValueError
        logger.error('Invalid configuration: %s', exc)
        sys.exit(1)

    request = BindgenRequest(
        input_file=args.input_file,
        output_file=args.output_file,
        library_name=args.library_name,
        class_name=args.class_name,
        namespace=args.namespace,
        manifest_file=args.manifest_file,
    )

    try:
        response = run_bindgen(request, config)
    except (BindgenError, ModelValidationError, OSError) as exc:
        logger.error('%s', exc)
        sys.exit(1)

    print(f'Generated {len(response.declared_names)} declarations into {response.output_file_path}')
    if response.failures:
        print(f'Skipped {len(response.failures)} declarations', file=sys.stderr)


def main():
    parser = argparse.ArgumentParser(
        description='c2cs: generate C# bindings from a C declaration model'
    )

    subparsers = parser.add_subparsers(
        dest='subcommand',
        description='valid subcommands for c2cs',
        help='Use one of these subcommands followed by -h for additional help',
        required=True
    )

    bindgen_parser = subparsers.add_parser(
        'bindgen',
        help='Generate a C# bindings file from a C declaration model'
    )

    parse_bindgen(bindgen_parser)

    args = parser.parse_args()

    match args.subcommand:
        case 'bindgen':
            bindgen(parser, args)
        case _:
            parser.print_help()


if __name__ == '__main__':
    main()
