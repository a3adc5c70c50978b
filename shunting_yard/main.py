"""
Command line entrypoint.

This script:
- Converts a single infix expression given as argument and prints its postfix form
- Or converts every line of an expressions file into a results file

Examples
--------
shunting-yard "(2 + 3) * -4"
shunting-yard --file resources/expressions.txt
"""

import argparse
import logging
from pathlib import Path
import sys
from typing import List, Optional

from pydantic import BaseModel, FilePath, ValidationError, model_validator

from shunting_yard.common.errors import ShuntingYardError
from shunting_yard.common.logger import configure_logger, logger
from shunting_yard.common.models import ConversionRequest, ConversionResult
from shunting_yard.lexer.tokenizer import Tokenizer
from shunting_yard.parser.parser import ShuntingYardParser
from shunting_yard.parser.validator import validate_infix, validate_postfix


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expression : str, optional
        Infix expression to convert.
    file_path : FilePath, optional
        Path to a file holding one expression per line.
    lenient : bool
        Drop unclosed parentheses instead of failing.
    dump : bool
        Log the token dumps of both streams.
    log_level : str
        Logging level name.
    """

    expression: Optional[str] = None
    file_path: Optional[FilePath] = None
    lenient: bool = False
    dump: bool = False
    log_level: str = "INFO"

    @model_validator(mode="after")
    def exactly_one_source(self) -> "CliArgs":
        """Ensure exactly one of expression and file_path is given."""
        if (self.expression is None) == (self.file_path is None):
            raise ValueError("Provide either an expression or --file, not both")
        return self


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param list argv: Arguments to parse, defaults to sys.argv

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        description="Convert infix arithmetic expressions to postfix (Reverse Polish) notation"
    )

    parser.add_argument("expression", nargs="?", help="Infix expression to convert")
    parser.add_argument("--file", dest="file_path", help="Path to a file with one expression per line")
    parser.add_argument("--lenient", action="store_true", help="Drop unclosed '(' instead of failing")
    parser.add_argument("--dump", action="store_true", help="Log token dumps")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args(argv)

    try:
        return CliArgs(**vars(args))
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results file path next to the input file.

    Examples
    --------
    input: resources/expressions.txt
    output: resources/expressions_postfix.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    return input_path.with_name(f"{input_path.stem}_postfix.txt")


def convert(request: ConversionRequest, parser: ShuntingYardParser, dump: bool = False) -> ConversionResult:
    """
    Convert one expression, capturing failures in the result.

    :param ConversionRequest request: Expression to convert
    :param ShuntingYardParser parser: Configured parser
    :param bool dump: Log the token dumps of both streams

    :return: Postfix lexemes or the error message
    :rtype: ConversionResult
    """
    tokenizer = Tokenizer(initial_capacity=parser.initial_capacity, max_capacity=parser.max_capacity)

    try:
        with tokenizer.tokenize(request.expression) as infix:
            if dump:
                logger.info(f"🔤 Infix tokens:\n{infix.dump()}")
            if not validate_infix(infix):
                logger.warning(f"⚠️ Malformed infix expression: {request.expression!r}")

            with parser.shunt(infix) as postfix:
                if dump:
                    logger.info(f"🚂 Postfix tokens:\n{postfix.dump()}")
                if not validate_postfix(postfix):
                    logger.warning(f"⚠️ Postfix sequence does not reduce to one value: {request.expression!r}")
                return ConversionResult(expression=request.expression, postfix=postfix.lexemes())

    except ShuntingYardError as exc:
        logger.error(f"❌ Could not convert {request.expression!r} ({exc.reason.value}): {exc}")
        return ConversionResult(expression=request.expression, error=str(exc))


def convert_file(input_path: Path, output_path: Path, parser: ShuntingYardParser, dump: bool = False) -> List[ConversionResult]:
    """
    Convert every non-empty line of ``input_path`` and write one result per line.

    :param Path input_path: File holding one expression per line
    :param Path output_path: Path where results will be written
    :param ShuntingYardParser parser: Configured parser
    :param bool dump: Log the token dumps of both streams

    :return: Results in input order
    :rtype: List[ConversionResult]
    """
    lines = [line.strip() for line in input_path.read_text(encoding="utf-8").splitlines() if line.strip()]
    results: List[ConversionResult] = []

    with output_path.open("w", encoding="utf-8") as f_out:
        for expr in lines:
            result = convert(ConversionRequest(expression=expr), parser, dump)
            results.append(result)
            f_out.write(f"{result.render()}\n")

    logger.info(f"📄 {len(results)} results written to {output_path}")
    return results


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function of the command line tool.

    :param list argv: Arguments to parse, defaults to sys.argv

    :return: Process exit code
    :rtype: int
    """
    cli_args = parse_args(argv)
    configure_logger(level=getattr(logging, cli_args.log_level))
    parser = ShuntingYardParser(strict_grouping=not cli_args.lenient)

    if cli_args.file_path is not None:
        input_path = Path(cli_args.file_path)
        results = convert_file(input_path, build_output_path(input_path), parser, cli_args.dump)
        return 0 if all(result.ok for result in results) else 1

    result = convert(ConversionRequest(expression=cli_args.expression), parser, cli_args.dump)
    if not result.ok:
        return 1
    print(" ".join(result.postfix))
    return 0


if __name__ == "__main__":
    sys.exit(main())
