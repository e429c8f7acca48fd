import argparse
import asyncio
import sys
import uuid
from datetime import datetime
from typing import Optional, List

from contrail_anon import ContrailAnonApp
from contrail_anon.common.constants import RUNS_BASE_DIR
from contrail_anon.common.dto import AnonResult, RunOptions
from contrail_anon.common.enums import VerboseOptions, ResultCode
from contrail_anon.version import __version__


def get_arg_parser():
    parser = argparse.ArgumentParser(
        prog="contrail-anon",
        description="Anonymise contrail DB dump",
    )
    parser.add_argument(
        "fq_name_dump",
        metavar="FQNAME_DUMP",
        help="""FQName table CSV dump""",
    )
    parser.add_argument(
        "uuid_dump",
        metavar="UUID_DUMP",
        help="""UUID table CSV dump""",
    )
    parser.add_argument(
        "output_dir",
        metavar="DST",
        help="""Destination directory. Anonymised dumps keep the file names of the input dumps""",
    )
    parser.add_argument(
        "--config",
        help="""Path to configuration file of contrail_anon in YAML""",
        type=str,
        default="",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        default=False,
        help="""Anonymise the two tables in separate processes""",
    )
    parser.add_argument(
        "--verbose",
        dest="verbose",
        type=str,
        choices=[v.value for v in VerboseOptions],
        default=VerboseOptions.INFO.value,
        help="""Enable verbose output. (default: %(default)s)""",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="""Enable debug mode, (default: %(default)s)""",
    )
    parser.add_argument(
        "--version",
        help="""Show the version number and exit""",
        action="store_true",
        default=False,
    )
    return parser


def build_run_options(cli_run_params: Optional[List[str]] = None) -> RunOptions:
    if cli_run_params is None:
        cli_run_params = sys.argv[1:]

    # Handle --version before positional arguments are required
    if "--version" in cli_run_params:
        print("Version %s" % __version__)
        sys.exit(0)

    parser = get_arg_parser()
    args_parsed = parser.parse_args(cli_run_params)
    args_dict = vars(args_parsed)

    if args_dict.get("debug") or args_dict.get("verbose") == VerboseOptions.DEBUG.value:
        args_dict["debug"] = True
        args_dict["verbose"] = VerboseOptions.DEBUG.value

    args_dict['verbose'] = VerboseOptions(args_dict['verbose'])

    internal_operation_id = str(uuid.uuid4())
    start_date = datetime.today()
    run_dir = str(
        RUNS_BASE_DIR /
        str(start_date.year) /
        str(start_date.month) /
        str(start_date.day) /
        internal_operation_id
    )

    args_dict.update({
        'contrail_anon_version': __version__,
        'internal_operation_id': internal_operation_id,
        'run_dir': run_dir,
    })
    return RunOptions(**args_dict)


async def run_contrail_anon(cli_run_params: Optional[List[str]] = None) -> AnonResult:
    """
    Run contrail_anon
    :param cli_run_params: list of params in command line format
    :return: result of contrail_anon
    """
    options = build_run_options(cli_run_params)
    result = await ContrailAnonApp(options).run()
    return result


def main(argv=None):
    result = asyncio.run(run_contrail_anon(argv))
    if result.result_code == ResultCode.FAIL:
        sys.exit(1)
