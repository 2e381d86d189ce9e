"""
Registry and built-in converter tests.

Scope
- Validate TypeRegistry contracts: identity keys, last-write-wins, lookups, factories.
- Validate Converter immutability and the process-wide default registry.
- Validate every built-in converter: accepted literals, hint-driven behavior,
  rendering and the faults raised on malformed or out-of-range input.
- Round-trip rendered values back through the converter for representative
  values of every built-in type (integers at the edges of their width included).

Conventions
- Test method names follow CamelCase per project convention.
- Converters are taken from default_registry(); custom registries are built fresh.
"""
import ipaddress
import pathlib
import unittest
from datetime import datetime, timedelta
from unittest import TestCase

from dataflags import *
from dataflags.utils import Unset


def converter(type):
    return default_registry().lookup_type(type)


def decimal(**options):
    return Converter(lambda value, hints: str(value), lambda text, hints: int(text), **options)


class Halfway(Converter):
    __slots__ = ()

    def tostr(self, value, hints, /):
        return str(value)


class TestTypeRegistry(TestCase):
    """Behavioral tests for TypeRegistry and Converter."""

    def testIdentityCombinesModuleAndName(self):
        first = type("Same", (), {"__module__": "one"})
        second = type("Same", (), {"__module__": "two"})
        self.assertEqual(identity(first), "one=>Same")
        self.assertNotEqual(identity(first), identity(second))

    def testIdentityOfNonClassIsNone(self):
        self.assertIsNone(identity(list[int]))
        self.assertIsNone(identity(int | None))

    def testLastRegistrationWins(self):
        registry = TypeRegistry()
        first = Converter(lambda value, hints: "first", lambda text, hints: 1)
        second = Converter(lambda value, hints: "second", lambda text, hints: 2)
        registry.register(int, first)
        registry.register(int, second)
        self.assertIs(registry.lookup_type(int), second)
        self.assertEqual(len(registry), 1)

    def testLookupUnknownReturnsNone(self):
        registry = TypeRegistry()
        self.assertIsNone(registry.lookup_type(int))
        self.assertIsNone(registry.lookup_factory(int))
        self.assertNotIn(int, registry)

    def testLookupByValueUsesExactType(self):
        self.assertIs(default_registry().lookup_value(Int8(3)), converter(Int8))
        self.assertIs(default_registry().lookup_value(True), converter(bool))

    def testDefaultFactoryIsScalar(self):
        registry = TypeRegistry()
        registry.register(int, Converter(lambda value, hints: str(value), lambda text, hints: int(text)))
        self.assertIs(registry.lookup_factory(int), scalar)

    def testCustomFactoryIsKept(self):
        def factory(flagset, slot, binding, converter):
            pass

        registry = TypeRegistry()
        registry.register(int, decimal(), factory)
        self.assertIs(registry.lookup_factory(int), factory)

    def testRegisterValidatesArguments(self):
        registry = TypeRegistry()
        with self.assertRaises(TypeError):
            registry.register(list[int], decimal())
        with self.assertRaises(TypeError):
            registry.register(int, object())
        with self.assertRaises(TypeError):
            registry.register(int, decimal(), "factory")

    def testConverterIsImmutable(self):
        instance = decimal(zero=0)
        with self.assertRaises(AttributeError):
            instance.boolean = True
        with self.assertRaises(AttributeError):
            del instance.boolean

    def testConverterRequiresFunctions(self):
        for arguments in ((), (str,), (Unset, int)):
            with self.subTest(arguments=arguments):
                with self.assertRaises(TypeError):
                    Converter(*arguments)
        with self.assertRaises(TypeError):
            Converter(str, "int")

    def testSubclassOverridesMethods(self):
        instance = Halfway(zero=0)
        self.assertEqual(instance.tostr(7, {}), "7")
        self.assertEqual(instance.zero(), 0)
        with self.assertRaises(NotImplementedError):
            instance.fromstr("7", {})
        self.assertIsNone(Halfway().zero())

    def testDefaultRegistryIsShared(self):
        self.assertIs(default_registry(), default_registry())
        for type in (int, Int8, UInt64, float, Float32, bool, str, timedelta, datetime, pathlib.Path):
            self.assertIn(type, default_registry())


class TestIntegerConverters(TestCase):
    """Integers of every width, radix hints and range checks."""

    def testDecimal(self):
        self.assertEqual(converter(int).fromstr("42", {}), 42)
        self.assertEqual(converter(int).fromstr("-42", {}), -42)
        self.assertEqual(converter(int).tostr(42, {}), "42")

    def testRadixHints(self):
        self.assertEqual(converter(int).fromstr("ff", {"base": 16}), 255)
        self.assertEqual(converter(int).fromstr("0xff", {"base": 16}), 255)
        self.assertEqual(converter(int).fromstr("755", {"base": 8}), 0o755)
        self.assertEqual(converter(int).fromstr("1010", {"base": 2}), 10)
        self.assertEqual(converter(int).tostr(255, {"base": 16}), "ff")
        self.assertEqual(converter(int).tostr(0o22, {"base": 8}), "22")

    def testUnknownRadixFallsBackToDecimal(self):
        self.assertEqual(converter(int).fromstr("10", {"base": 7}), 10)

    def testMalformedLiteral(self):
        with self.assertRaises(ConversionError) as context:
            converter(int).fromstr("12a", {})
        self.assertEqual(context.exception.literal, "12a")
        self.assertEqual(context.exception.target, "int")
        self.assertIs(context.exception.options["code"], FaultCode.MALFORMED_LITERAL)

    def testDigitSeparatorsAndForeignDigitsAreMalformed(self):
        for literal, base in (("1_000", 10), ("0x_ff", 16), ("1_0", 2), ("\u0661\u0662", 10), ("\uff11", 10), ("", 10), ("-", 10)):
            with self.subTest(literal=literal, base=base):
                with self.assertRaises(ConversionError) as context:
                    converter(int).fromstr(literal, {"base": base})
                self.assertIs(context.exception.options["code"], FaultCode.MALFORMED_LITERAL)

    def testSignsAndSurroundingSpaces(self):
        self.assertEqual(converter(int).fromstr(" +7 ", {}), 7)
        self.assertEqual(converter(int).fromstr("-0xff", {"base": 16}), -255)

    def testWidthBounds(self):
        self.assertEqual(converter(Int8).fromstr("-128", {}), -128)
        self.assertEqual(converter(Int8).fromstr("127", {}), 127)
        for literal in ("128", "-129"):
            with self.subTest(literal=literal):
                with self.assertRaises(ConversionError) as context:
                    converter(Int8).fromstr(literal, {})
                self.assertIs(context.exception.options["code"], FaultCode.OUT_OF_RANGE)

    def testUnsignedRejectsNegative(self):
        for type in (UInt, UInt8, UInt16, UInt32, UInt64):
            with self.subTest(type=type.__name__):
                with self.assertRaises(ConversionError):
                    converter(type).fromstr("-1", {})

    def testParsedValueHasDeclaredType(self):
        self.assertIsInstance(converter(UInt16).fromstr("65535", {}), UInt16)

    def testRoundTripAcrossWidths(self):
        for type in (Int8, Int16, Int32, Int64, UInt8, UInt16, UInt32, UInt64):
            low, high = type.bounds()
            for value in (low, high, (low + high) // 2):
                for base in (2, 8, 10, 16):
                    with self.subTest(type=type.__name__, value=value, base=base):
                        hints = {"base": base}
                        text = converter(type).tostr(type(value), hints)
                        self.assertEqual(converter(type).fromstr(text, hints), value)

    def testUnsizedIntegersAreUnbounded(self):
        self.assertEqual(converter(int).fromstr(str(1 << 100), {}), 1 << 100)
        self.assertEqual(converter(UInt).fromstr(str(1 << 100), {}), 1 << 100)


class TestFloatConverters(TestCase):
    """Floats, single precision and explicit failures."""

    def testDecimalAndExponent(self):
        self.assertEqual(converter(float).fromstr("1.5", {}), 1.5)
        self.assertEqual(converter(float).fromstr("-2e3", {}), -2000.0)
        self.assertEqual(converter(float).tostr(1.5, {}), "1.5")

    def testMalformedIsAnError(self):
        with self.assertRaises(ConversionError) as context:
            converter(float).fromstr("one", {})
        self.assertEqual(context.exception.literal, "one")

    def testFloat32Precision(self):
        value = converter(Float32).fromstr("0.1", {})
        self.assertIsInstance(value, Float32)
        self.assertNotEqual(value, 0.1)
        self.assertAlmostEqual(value, 0.1, places=6)

    def testFloat32Overflow(self):
        with self.assertRaises(ConversionError) as context:
            converter(Float32).fromstr("1e39", {})
        self.assertIs(context.exception.options["code"], FaultCode.OUT_OF_RANGE)

    def testFloat32OverflowOfBothSigns(self):
        for literal in ("3.5e38", "-3.5e38", "1e300"):
            with self.subTest(literal=literal):
                with self.assertRaises(ConversionError) as context:
                    converter(Float32).fromstr(literal, {})
                self.assertIs(context.exception.options["code"], FaultCode.OUT_OF_RANGE)

    def testFloat32KeepsInfinityAndLargestValue(self):
        self.assertEqual(converter(Float32).fromstr("inf", {}), float("inf"))
        self.assertEqual(converter(Float32).fromstr("-inf", {}), float("-inf"))
        self.assertEqual(converter(Float32).fromstr("3.4028234e38", {}), 3.4028234663852886e38)
        self.assertEqual(converter(Float64).fromstr("1e300", {}), 1e300)

    def testRoundTrip(self):
        for value in (0.0, -1.25, 3.141592653589793, 1e300, float("inf")):
            with self.subTest(value=value):
                self.assertEqual(converter(float).fromstr(converter(float).tostr(value, {}), {}), value)


class TestBoolAndStrConverters(TestCase):
    def testTrueSpellings(self):
        for literal in ("1", "t", "T", "TRUE", "true", "True"):
            with self.subTest(literal=literal):
                self.assertIs(converter(bool).fromstr(literal, {}), True)

    def testFalseSpellings(self):
        for literal in ("0", "f", "F", "FALSE", "false", "False"):
            with self.subTest(literal=literal):
                self.assertIs(converter(bool).fromstr(literal, {}), False)

    def testInvalidBool(self):
        with self.assertRaises(ConversionError):
            converter(bool).fromstr("yes", {})

    def testBoolIsBoolean(self):
        self.assertTrue(converter(bool).boolean)
        self.assertFalse(converter(int).boolean)

    def testBoolRoundTrip(self):
        for value in (True, False):
            self.assertIs(converter(bool).fromstr(converter(bool).tostr(value, {}), {}), value)

    def testStrIsIdentity(self):
        for value in ("", "plain", " spaced ", "a,b", "-dash"):
            with self.subTest(value=value):
                self.assertEqual(converter(str).fromstr(converter(str).tostr(value, {}), {}), value)


class TestDurationConverter(TestCase):
    def testCompoundLiterals(self):
        self.assertEqual(converter(timedelta).fromstr("1h30m", {}), timedelta(hours=1, minutes=30))
        self.assertEqual(converter(timedelta).fromstr("1.5s", {}), timedelta(seconds=1.5))
        self.assertEqual(converter(timedelta).fromstr("300ms", {}), timedelta(milliseconds=300))
        self.assertEqual(converter(timedelta).fromstr("-2m45s", {}), -timedelta(minutes=2, seconds=45))
        self.assertEqual(converter(timedelta).fromstr("250us", {}), timedelta(microseconds=250))
        self.assertEqual(converter(timedelta).fromstr("250µs", {}), timedelta(microseconds=250))
        self.assertEqual(converter(timedelta).fromstr("0", {}), timedelta())

    def testRendering(self):
        self.assertEqual(converter(timedelta).tostr(timedelta(hours=1, minutes=30), {}), "1h30m0s")
        self.assertEqual(converter(timedelta).tostr(timedelta(seconds=2.5), {}), "2.5s")
        self.assertEqual(converter(timedelta).tostr(timedelta(milliseconds=300), {}), "300ms")
        self.assertEqual(converter(timedelta).tostr(timedelta(microseconds=5), {}), "5µs")
        self.assertEqual(converter(timedelta).tostr(-timedelta(minutes=2, seconds=45), {}), "-2m45s")
        self.assertEqual(converter(timedelta).tostr(timedelta(), {}), "0s")

    def testMalformed(self):
        for literal in ("", "1", "1d", "h", "1h-30m", "abc"):
            with self.subTest(literal=literal):
                with self.assertRaises(ConversionError):
                    converter(timedelta).fromstr(literal, {})

    def testRoundTrip(self):
        for value in (
                timedelta(),
                timedelta(microseconds=1),
                timedelta(milliseconds=1, microseconds=500),
                timedelta(seconds=59, microseconds=999999),
                timedelta(hours=26, minutes=3, seconds=4),
                -timedelta(hours=1, seconds=0.25),
        ):
            with self.subTest(value=value):
                self.assertEqual(converter(timedelta).fromstr(converter(timedelta).tostr(value, {}), {}), value)


class TestTimeConverter(TestCase):
    def testDefaultLayout(self):
        self.assertEqual(DEFAULT_TIME_LAYOUT, "%Y-%m-%d %H:%M:%S")
        self.assertEqual(
            converter(datetime).fromstr("2024-01-02 03:04:05", {}),
            datetime(2024, 1, 2, 3, 4, 5),
        )

    def testLayoutHint(self):
        hints = {"layout": "%Y/%m/%d"}
        self.assertEqual(converter(datetime).fromstr("2024/02/29", hints), datetime(2024, 2, 29))
        self.assertEqual(converter(datetime).tostr(datetime(2024, 2, 29), hints), "2024/02/29")

    def testLayoutMismatch(self):
        with self.assertRaises(ConversionError) as context:
            converter(datetime).fromstr("02.01.2024", {})
        self.assertIs(context.exception.options["code"], FaultCode.LAYOUT_MISMATCH)

    def testRoundTrip(self):
        for value in (datetime(1970, 1, 1), datetime(2006, 1, 2, 15, 4, 5), datetime(2999, 12, 31, 23, 59, 59)):
            with self.subTest(value=value):
                self.assertEqual(converter(datetime).fromstr(converter(datetime).tostr(value, {}), {}), value)

    def testZeroIsEpoch(self):
        self.assertEqual(converter(datetime).zero(), datetime(1970, 1, 1))


class TestConstructorConverters(TestCase):
    def testAddressesAndNetworks(self):
        self.assertEqual(
            converter(ipaddress.IPv4Address).fromstr("10.0.0.1", {}),
            ipaddress.IPv4Address("10.0.0.1"),
        )
        self.assertEqual(
            converter(ipaddress.IPv6Network).tostr(ipaddress.IPv6Network("2001:db8::/32"), {}),
            "2001:db8::/32",
        )
        with self.assertRaises(ConversionError):
            converter(ipaddress.IPv4Address).fromstr("10.0.0.256", {})

    def testPath(self):
        self.assertEqual(converter(pathlib.Path).fromstr("/tmp/a.zip", {}), pathlib.Path("/tmp/a.zip"))
        self.assertEqual(converter(pathlib.Path).zero(), pathlib.Path())


if __name__ == "__main__":
    unittest.main()
