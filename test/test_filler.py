"""
Filler tests (public facade, end to end).

Scope
- Validate the documented end-to-end properties: action chains with interleaved
  options, unknown actions leaving the object untouched, bare boolean flags,
  fixed-length list policy, allocation of None fields right after fill().
- Validate argument forms (list, shell string, sys.argv) and the one-shot fill().
- Validate error modes (CONTINUE, EXIT, PANIC) including help requests.
- Validate usage rendering and per-action usage lookup.

Conventions
- Test method names follow CamelCase per project convention.
- Console output is captured; nothing is printed while the suite runs.
"""
import contextlib
import io
import sys
import unittest
from dataclasses import dataclass
from unittest import TestCase, mock

from rich.console import Console

import dataflags.faults
from dataflags import *


@dataclass
class Act:
    y: int = 0


@dataclass
class Root:
    x: int = 0
    boolvar: bool = False
    triple: tuple[int, int, int] = (0, 0, 0)
    act: Act = action(Act)


@dataclass
class ZipFolder:
    folder_name: str = option("", alias="folder", usage="specify folder name")


@dataclass
class ZipFile:
    file_name: str = option("defaultzip.file", alias="f", usage="specify file name")


@dataclass
class DryRun:
    pass


@dataclass
class Compress:
    profile: str = ""
    skip: bool = option(False, alias="s")
    no_flag: str = option("", skip=True)
    dry_run: DryRun = action(DryRun, usage="dry run, doesn't actually create any file")
    zip_folder: ZipFolder = action(ZipFolder, usage="zip a folder")
    zip_file: ZipFile = action(ZipFile, usage="zip a file")


@dataclass
class Extract:
    input_file: str = option("", usage="input zip file")


@dataclass
class ZipCLI:
    config_file: str = option("default.conf", usage="working profile")
    compress: Compress | None = action(usage="to compress things")
    extract: Extract = action(Extract, usage="to unzip things")


@dataclass
class Duplicated:
    first: Act = action(Act, alias="act")
    second: Act = action(Act, alias="act")


def filled(obj, /, **options):
    filler = Filler("tool", "a tool", **{"errors": ErrorHandling.CONTINUE} | options)
    filler.fill(obj)
    return filler


class TestFillerProperties(TestCase):
    def testActionChain(self):
        root = Root()
        chain = filled(root).parse(["-x", "1", "act", "-y", "2"])
        self.assertEqual(chain, ["act"])
        self.assertEqual(root.x, 1)
        self.assertEqual(root.act.y, 2)

    def testUnknownActionDoesNotMutate(self):
        root = Root()
        with self.assertRaises(ActionError):
            filled(root).parse(["-x", "1", "badact"])
        self.assertEqual(root.act.y, 0)
        self.assertEqual(root.x, 0)

    def testBareBoolean(self):
        root = Root()
        self.assertEqual(filled(root).parse(["-boolvar"]), [])
        self.assertIs(root.boolvar, True)

    def testFixedLengthList(self):
        root = Root()
        filler = filled(root)
        filler.parse(["-triple", "4,5,6"])
        self.assertEqual(root.triple, (4, 5, 6))
        for literal in ("1,2,3,4", "1,2"):
            with self.subTest(literal=literal):
                with self.assertRaises(ConversionError):
                    filler.parse(["-triple", literal])
                self.assertEqual(root.triple, (4, 5, 6))

    def testNoneFieldsAllocatedOnFill(self):
        cli = ZipCLI()
        self.assertIsNone(cli.compress)
        filled(cli)
        self.assertEqual(cli.compress, Compress())
        self.assertEqual(cli.compress.zip_file.file_name, "defaultzip.file")

    def testDuplicateActionsFailBeforeParsing(self):
        with self.assertRaises(BindingError):
            Filler(errors=ErrorHandling.EXIT).fill(Duplicated())

    def testNestedChain(self):
        cli = ZipCLI()
        chain = filled(cli).parse(["-config-file", "x.conf", "compress", "-s", "-profile", "fast", "zip-file", "-f", "a.zip"])
        self.assertEqual(chain, ["compress", "zip_file"])
        self.assertEqual(cli.config_file, "x.conf")
        self.assertIs(cli.compress.skip, True)
        self.assertEqual(cli.compress.profile, "fast")
        self.assertEqual(cli.compress.zip_file.file_name, "a.zip")
        self.assertEqual(cli.compress.no_flag, "")

    def testSkippedFieldIsNotAFlag(self):
        with self.assertRaises(UnknownFlagError):
            filled(ZipCLI()).parse(["compress", "-no-flag", "x"])


class TestFillerArguments(TestCase):
    def testShellString(self):
        root = Root()
        self.assertEqual(filled(root).parse("-x 3 act -y '4'"), ["act"])
        self.assertEqual((root.x, root.act.y), (3, 4))

    def testSysArgv(self):
        root = Root()
        with mock.patch.object(sys, "argv", ["tool", "-x", "5"]):
            filled(root).parse()
        self.assertEqual(root.x, 5)

    def testInvalidArguments(self):
        with self.assertRaises(TypeError):
            filled(Root()).parse(42)
        with self.assertRaises(TypeError):
            filled(Root()).parse(["-x", 1])

    def testOneShotFill(self):
        root = Root()
        self.assertEqual(fill(root, ["act", "-y", "7"], name="tool", errors=ErrorHandling.CONTINUE), ["act"])
        self.assertEqual(root.act.y, 7)

    def testCustomPrefix(self):
        root = Root()
        self.assertEqual(filled(root, prefix="+").parse(["+x", "-1", "act", "++y=2"]), ["act"])
        self.assertEqual((root.x, root.act.y), (-1, 2))

    def testOptionValidation(self):
        with self.assertRaises(TypeError):
            Filler(errors="exit")
        with self.assertRaises(ValueError):
            Filler(prefix="")
        with self.assertRaises(TypeError):
            Filler(fancy=1)


class TestFillerErrorModes(TestCase):
    def testContinueRaisesWithContext(self):
        filler = filled(Root())
        with self.assertRaises(UnknownActionError) as context:
            filler.parse(["nope"])
        self.assertIs(context.exception.options["errors"], ErrorHandling.CONTINUE)
        self.assertIs(context.exception.options["filler"], filler)

    def testExitPrintsAndExits(self):
        stderr = io.StringIO()
        filler = filled(Root(), errors=ErrorHandling.EXIT, colorful=False)
        with mock.patch.object(dataflags.faults, "console", Console(file=stderr, width=200)):
            with self.assertRaises(SystemExit) as context:
                filler.parse(["-x", "one"])
        self.assertEqual(context.exception.code, 2)
        self.assertIn("invalid value for flag '-x' at first position", stderr.getvalue())
        self.assertIn(FaultCode.MALFORMED_LITERAL.normalize(), stderr.getvalue())

    def testPanicRaisesFatalError(self):
        filler = filled(Root(), errors=ErrorHandling.PANIC)
        with self.assertRaises(FatalError) as context:
            filler.parse(["badact"])
        self.assertIsInstance(context.exception.fault, UnknownActionError)
        self.assertIsInstance(context.exception.__cause__, UnknownActionError)
        self.assertNotIsInstance(context.exception, Exception)

    def testHelpContinue(self):
        with self.assertRaises(HelpRequestedError) as context:
            filled(Root()).parse(["act", "-h"])
        self.assertEqual(context.exception.options["node"].name, "act")

    def testHelpExitPrintsUsage(self):
        stdout = io.StringIO()
        filler = filled(ZipCLI(), errors=ErrorHandling.EXIT, colorful=False)
        with contextlib.redirect_stdout(stdout):
            with self.assertRaises(SystemExit) as context:
                filler.parse(["compress", "-help"])
        self.assertEqual(context.exception.code, 0)
        self.assertIn("to compress things", stdout.getvalue())
        self.assertIn("-profile", stdout.getvalue())
        self.assertNotIn("-config-file", stdout.getvalue())


class TestFillerUsage(TestCase):
    def testUsageText(self):
        text = filled(ZipCLI()).usage_text()
        self.assertTrue(text.startswith("a tool\n"))
        self.assertIn("  -config-file: working profile", text)
        self.assertIn("(default: default.conf)", text)
        self.assertIn("  = compress: to compress things", text)
        self.assertIn("    -s:", text)
        self.assertIn("    = zip-file: zip a file", text)
        self.assertIn("      -f: specify file name", text)
        self.assertIn("(default: defaultzip.file)", text)
        self.assertIn("  = extract: to unzip things", text)
        self.assertLess(text.index("= dry-run"), text.index("= zip-folder"))
        self.assertLess(text.index("= zip-folder"), text.index("= zip-file"))

    def testActionUsage(self):
        filler = filled(ZipCLI())
        self.assertIn("-input-file: input zip file", filler.action_usage("extract"))
        self.assertNotIn("config-file", filler.action_usage("extract"))
        self.assertEqual(filler.action_usage("missing"), "")
        self.assertEqual(filler.action_usage("zip_file"), "")

    def testUsagePrints(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            filled(ZipCLI(), colorful=False).usage()
        self.assertIn("-config-file", stdout.getvalue())

    def testAccessors(self):
        filler = filled(Root())
        self.assertIs(filler.flagset, filler.root.flagset)
        self.assertEqual(filler.name, "tool")
        self.assertIs(filler.errors, ErrorHandling.CONTINUE)
        self.assertIs(filler.registry, default_registry())


if __name__ == "__main__":
    unittest.main()
