"""The standard table of prefixes and units.

Each record names a unit (or prefix), lists its aliases with the display
alias first, and defines it as `scalar` times the product of the tokens in
`numerator` divided by the product of the tokens in `denominator`. Tokens may
refer to any other unit in the table; base units refer to themselves.
"""

from fractions import Fraction

import numpy


AVOGADRO = 6.02214129e23
"""Avogadro's number, in units of 1/mol."""

SPEED_OF_LIGHT = 299792458
"""The speed of light in vacuum, in m/s."""


_prefixes = [
    {'name': 'googol', 'aliases': ['googol'], 'scalar': 10**100},
    {'name': 'kibi', 'aliases': ['Ki', 'Kibi', 'kibi'], 'scalar': 2**10},
    {'name': 'mebi', 'aliases': ['Mi', 'Mebi', 'mebi'], 'scalar': 2**20},
    {'name': 'gibi', 'aliases': ['Gi', 'Gibi', 'gibi'], 'scalar': 2**30},
    {'name': 'tebi', 'aliases': ['Ti', 'Tebi', 'tebi'], 'scalar': 2**40},
    {'name': 'pebi', 'aliases': ['Pi', 'Pebi', 'pebi'], 'scalar': 2**50},
    {'name': 'exi', 'aliases': ['Ei', 'Exi', 'exi'], 'scalar': 2**60},
    {'name': 'zebi', 'aliases': ['Zi', 'Zebi', 'zebi'], 'scalar': 2**70},
    {'name': 'yebi', 'aliases': ['Yi', 'Yebi', 'yebi'], 'scalar': 2**80},
    {'name': 'yotta', 'aliases': ['Y', 'Yotta', 'yotta'], 'scalar': 10**24},
    {'name': 'zetta', 'aliases': ['Z', 'Zetta', 'zetta'], 'scalar': 10**21},
    {'name': 'exa', 'aliases': ['E', 'Exa', 'exa'], 'scalar': 10**18},
    {'name': 'peta', 'aliases': ['P', 'Peta', 'peta'], 'scalar': 10**15},
    {'name': 'tera', 'aliases': ['T', 'Tera', 'tera'], 'scalar': 10**12},
    {'name': 'giga', 'aliases': ['G', 'Giga', 'giga'], 'scalar': 10**9},
    {'name': 'mega', 'aliases': ['M', 'Mega', 'mega'], 'scalar': 10**6},
    {'name': 'kilo', 'aliases': ['k', 'kilo'], 'scalar': 10**3},
    {'name': 'hecto', 'aliases': ['h', 'Hecto', 'hecto'], 'scalar': 10**2},
    {'name': 'deca', 'aliases': ['da', 'Deca', 'deca', 'deka'], 'scalar': 10},
    {'name': 'deci', 'aliases': ['d', 'Deci', 'deci'], 'scalar': Fraction(1, 10)},
    {'name': 'centi', 'aliases': ['c', 'Centi', 'centi'], 'scalar': Fraction(1, 10**2)},
    {'name': 'milli', 'aliases': ['m', 'Milli', 'milli'], 'scalar': Fraction(1, 10**3)},
    {'name': 'micro', 'aliases': ['u', 'µ', 'μ', 'Micro', 'micro'], 'scalar': Fraction(1, 10**6)},
    {'name': 'nano', 'aliases': ['n', 'Nano', 'nano'], 'scalar': Fraction(1, 10**9)},
    {'name': 'pico', 'aliases': ['p', 'Pico', 'pico'], 'scalar': Fraction(1, 10**12)},
    {'name': 'femto', 'aliases': ['f', 'Femto', 'femto'], 'scalar': Fraction(1, 10**15)},
    {'name': 'atto', 'aliases': ['a', 'Atto', 'atto'], 'scalar': Fraction(1, 10**18)},
    {'name': 'zepto', 'aliases': ['z', 'Zepto', 'zepto'], 'scalar': Fraction(1, 10**21)},
    {'name': 'yocto', 'aliases': ['y', 'Yocto', 'yocto'], 'scalar': Fraction(1, 10**24)},
    {'name': '1', 'aliases': ['1'], 'scalar': 1},
]
for _prefix in _prefixes:
    _prefix['kind'] = 'prefix'


_base = [
    {
        'name': 'meter',
        'aliases': ['m', 'meter', 'meters', 'metre', 'metres'],
        'kind': 'length',
    },
    {
        'name': 'kilogram',
        'aliases': ['kg', 'kilogram', 'kilograms'],
        'kind': 'mass',
    },
    {
        'name': 'second',
        'aliases': ['s', 'sec', 'second', 'seconds'],
        'kind': 'time',
    },
    {
        'name': 'mole',
        'aliases': ['mol', 'mole'],
        'kind': 'substance',
    },
    {
        'name': 'ampere',
        'aliases': ['A', 'ampere', 'amperes', 'amp', 'amps'],
        'kind': 'current',
    },
    {
        'name': 'radian',
        'aliases': ['rad', 'radian', 'radians'],
        'kind': 'angle',
    },
    {
        'name': 'kelvin',
        'aliases': ['degK', 'kelvin'],
        'kind': 'temperature',
    },
    {
        'name': 'tempK',
        'aliases': ['tempK'],
        'kind': 'temperature',
    },
    {
        'name': 'byte',
        'aliases': ['B', 'byte', 'bytes'],
        'kind': 'information',
    },
    {
        'name': 'dollar',
        'aliases': ['USD', 'dollar'],
        'kind': 'currency',
    },
    {
        'name': 'candela',
        'aliases': ['cd', 'candela'],
        'kind': 'luminosity',
    },
    {
        'name': 'each',
        'aliases': ['each'],
        'kind': 'counting',
    },
    {
        'name': 'steradian',
        'aliases': ['sr', 'steradian', 'steradians'],
        'kind': 'solid_angle',
    },
    {
        'name': 'decibel',
        'aliases': ['dB', 'decibel', 'decibels'],
        'kind': 'logarithmic',
    },
]
for _record in _base:
    _record['scalar'] = 1
    _record['numerator'] = [f"<{_record['name']}>"]


def _unit(name, aliases, scalar, kind, numerator, denominator=None):
    """Create a record for a derived unit."""
    return {
        'name': name,
        'aliases': aliases,
        'scalar': scalar,
        'kind': kind,
        'numerator': numerator,
        'denominator': denominator or ['<1>'],
    }


_derived = [
    # length
    _unit('inch', ['in', 'inch', 'inches', '"'], Fraction(254, 10000), 'length', ['<meter>']),
    _unit('foot', ['ft', 'foot', 'feet', "'"], 12, 'length', ['<inch>']),
    _unit('survey-foot', ['sft', 'sfoot', 'sfeet'], Fraction(1200, 3937), 'length', ['<meter>']),
    _unit('yard', ['yd', 'yard', 'yards'], 3, 'length', ['<foot>']),
    _unit('mile', ['mi', 'mile', 'miles'], 5280, 'length', ['<foot>']),
    _unit('naut-mile', ['nmi', 'NM'], 1852, 'length', ['<meter>']),
    _unit('league', ['league', 'leagues'], 3, 'length', ['<mile>']),
    _unit('naut-league', ['nleague', 'nleagues'], 3, 'length', ['<naut-mile>']),
    _unit('furlong', ['furlong', 'furlongs'], Fraction(1, 8), 'length', ['<mile>']),
    _unit('rod', ['rd', 'rod', 'rods'], Fraction(33, 2), 'length', ['<foot>']),
    _unit('fathom', ['fathom', 'fathoms'], 6, 'length', ['<foot>']),
    _unit('mil', ['mil', 'mils'], Fraction(1, 1000), 'length', ['<inch>']),
    _unit('angstrom', ['ang', 'angstrom', 'angstroms'], Fraction(1, 10**10), 'length', ['<meter>']),
    _unit('pica', ['pica', 'picas'], Fraction(1, 72), 'length', ['<foot>']),
    _unit('point', ['point', 'points'], Fraction(1, 12), 'length', ['<pica>']),
    _unit('light-second', ['ls', 'lsec', 'light-second'], SPEED_OF_LIGHT, 'length', ['<meter>']),
    _unit('light-minute', ['lmin', 'light-minute'], 60, 'length', ['<light-second>']),
    _unit('light-year', ['ly', 'light-year'], 31556926, 'length', ['<light-second>']),
    _unit('parsec', ['pc', 'parsec', 'parsecs'], 3.26163626, 'length', ['<light-year>']),
    _unit('AU', ['AU', 'astronomical-unit'], 149597870700, 'length', ['<meter>']),
    _unit('redshift', ['z', 'red-shift', 'redshift'], 1.302773e26, 'length', ['<meter>']),
    # mass
    _unit('AMU', ['u', 'AMU', 'amu'], 0.001 / AVOGADRO, 'mass', ['<kilogram>']),
    _unit('dalton', ['Da', 'Dalton', 'Daltons', 'dalton', 'daltons'], 1, 'mass', ['<AMU>']),
    _unit('metric-ton', ['tonne'], 1000, 'mass', ['<kilogram>']),
    _unit('gram', ['g', 'gram', 'grams', 'gramme', 'grammes'], Fraction(1, 1000), 'mass', ['<kilogram>']),
    _unit('pound', ['lbs', 'lb', 'lbm', 'pound-mass', 'pound', 'pounds', '#'], Fraction(45359237, 10**8), 'mass', ['<kilogram>']),
    _unit('ounce', ['oz', 'ounce', 'ounces'], Fraction(1, 16), 'mass', ['<pound>']),
    _unit('short-ton', ['tn', 'ton', 'tons', 'short-tons'], 2000, 'mass', ['<pound>']),
    _unit('carat', ['ct', 'carat', 'carats'], Fraction(1, 5000), 'mass', ['<kilogram>']),
    _unit('stone', ['st', 'stone', 'stones'], 14, 'mass', ['<pound>']),
    _unit('slug', ['slug', 'slugs'], 1, 'mass', ['<pound-force>', '<second>', '<second>'], ['<foot>']),
    # time
    _unit('minute', ['min', 'minute', 'minutes'], 60, 'time', ['<second>']),
    _unit('hour', ['h', 'hr', 'hrs', 'hour', 'hours'], 60, 'time', ['<minute>']),
    _unit('day', ['d', 'day', 'days'], 24, 'time', ['<hour>']),
    _unit('week', ['wk', 'week', 'weeks'], 7, 'time', ['<day>']),
    _unit('fortnight', ['fortnight', 'fortnights'], 2, 'time', ['<week>']),
    _unit('year', ['y', 'yr', 'year', 'years', 'annum'], 31556926, 'time', ['<second>']),
    _unit('decade', ['decade', 'decades'], 10, 'time', ['<year>']),
    _unit('century', ['century', 'centuries'], 100, 'time', ['<year>']),
    # area
    _unit('hectare', ['hectare'], 10000, 'area', ['<meter>', '<meter>']),
    _unit('acre', ['acre', 'acres'], Fraction(1, 640), 'area', ['<mile>', '<mile>']),
    _unit('sqft', ['sqft'], 1, 'area', ['<foot>', '<foot>']),
    _unit('sqin', ['sqin'], 1, 'area', ['<inch>', '<inch>']),
    # volume
    _unit('liter', ['l', 'L', 'liter', 'liters', 'litre', 'litres'], Fraction(1, 1000), 'volume', ['<meter>', '<meter>', '<meter>']),
    _unit('gallon', ['gal', 'gallon', 'gallons'], 231, 'volume', ['<inch>', '<inch>', '<inch>']),
    _unit('quart', ['qt', 'quart', 'quarts'], Fraction(1, 4), 'volume', ['<gallon>']),
    _unit('pint', ['pt', 'pint', 'pints'], Fraction(1, 8), 'volume', ['<gallon>']),
    _unit('cup', ['cu', 'cup', 'cups'], Fraction(1, 16), 'volume', ['<gallon>']),
    _unit('fluid-ounce', ['floz', 'fluid-ounce', 'fluid-ounces'], Fraction(1, 128), 'volume', ['<gallon>']),
    _unit('tablespoon', ['tbs', 'tbsp', 'tablespoon', 'tablespoons'], Fraction(1, 2), 'volume', ['<fluid-ounce>']),
    _unit('teaspoon', ['tsp', 'teaspoon', 'teaspoons'], Fraction(1, 3), 'volume', ['<tablespoon>']),
    _unit('bdft', ['bdft', 'fbm', 'boardfoot', 'boardfeet', 'bf'], Fraction(1, 12), 'volume', ['<foot>', '<foot>', '<foot>']),
    # volumetric flow
    _unit('cfm', ['cfm', 'CFM', 'CFPM'], 1, 'volumetric_flow', ['<foot>', '<foot>', '<foot>'], ['<minute>']),
    # speed
    _unit('kph', ['kph'], 1, 'speed', ['<kilo>', '<meter>'], ['<hour>']),
    _unit('mph', ['mph'], 1, 'speed', ['<mile>'], ['<hour>']),
    _unit('fps', ['fps'], 1, 'speed', ['<foot>'], ['<second>']),
    _unit('knot', ['kt', 'kn', 'kts', 'knot', 'knots'], 1, 'speed', ['<naut-mile>'], ['<hour>']),
    # acceleration
    _unit('gee', ['gee', 'standard-gravitation'], Fraction(196133, 20000), 'acceleration', ['<meter>'], ['<second>', '<second>']),
    # force
    _unit('newton', ['N', 'Newton', 'newton', 'newtons'], 1, 'force', ['<kilogram>', '<meter>'], ['<second>', '<second>']),
    _unit('dyne', ['dyn', 'dyne'], Fraction(1, 10**5), 'force', ['<newton>']),
    _unit('pound-force', ['lbf', 'pound-force'], 1, 'force', ['<pound>', '<gee>']),
    _unit('poundal', ['pdl', 'poundal', 'poundals'], 1, 'force', ['<pound>', '<foot>'], ['<second>', '<second>']),
    # temperature differences
    _unit('celsius', ['degC', 'celsius', 'centigrade'], 1, 'temperature', ['<kelvin>']),
    _unit('fahrenheit', ['degF', 'fahrenheit'], Fraction(5, 9), 'temperature', ['<kelvin>']),
    _unit('rankine', ['degR', 'rankine'], 1, 'temperature', ['<fahrenheit>']),
    # temperature scale points
    _unit('tempC', ['tempC'], 1, 'temperature', ['<tempK>']),
    _unit('tempF', ['tempF'], Fraction(5, 9), 'temperature', ['<tempK>']),
    _unit('tempR', ['tempR'], 1, 'temperature', ['<tempF>']),
    # pressure
    _unit('pascal', ['Pa', 'pascal', 'pascals'], 1, 'pressure', ['<kilogram>'], ['<meter>', '<second>', '<second>']),
    _unit('bar', ['bar', 'bars'], 10**5, 'pressure', ['<pascal>']),
    _unit('atm', ['atm', 'ATM', 'atmosphere', 'atmospheres'], 101325, 'pressure', ['<pascal>']),
    _unit('mmHg', ['mmHg'], Fraction(196133, 20000) * Fraction(135951, 10) / 1000, 'pressure', ['<pascal>']),
    _unit('inHg', ['inHg'], Fraction(196133, 20000) * Fraction(135951, 10) * Fraction(254, 10000), 'pressure', ['<pascal>']),
    _unit('torr', ['Torr', 'torr'], Fraction(1, 760), 'pressure', ['<atm>']),
    _unit('psi', ['psi'], 1, 'pressure', ['<pound-force>'], ['<inch>', '<inch>']),
    _unit('cmh2o', ['cmH2O', 'cmh2o', 'cmAq'], Fraction(196133, 2000), 'pressure', ['<pascal>']),
    _unit('inh2o', ['inH2O', 'inh2o', 'inAq'], Fraction(196133, 20000) * Fraction(254, 10), 'pressure', ['<pascal>']),
    # viscosity
    _unit('poise', ['P', 'poise'], Fraction(1, 10), 'viscosity', ['<pascal>', '<second>']),
    _unit('stokes', ['St', 'stokes'], Fraction(1, 10**4), 'viscosity', ['<meter>', '<meter>'], ['<second>']),
    # substance
    _unit('molar', ['M', 'molar'], 1, 'molar_concentration', ['<mole>'], ['<liter>']),
    _unit('katal', ['kat', 'katal'], 1, 'activity', ['<mole>'], ['<second>']),
    _unit('enzyme-unit', ['U', 'enzUnit'], Fraction(1, 60), 'activity', ['<micro>', '<katal>']),
    # energy
    _unit('joule', ['J', 'joule', 'Joule', 'joules'], 1, 'energy', ['<newton>', '<meter>']),
    _unit('erg', ['erg', 'ergs'], Fraction(1, 10**7), 'energy', ['<joule>']),
    _unit('btu', ['BTU', 'btu', 'BTUs', 'btus'], Fraction('1055.056'), 'energy', ['<joule>']),
    _unit('therm', ['thm', 'therm', 'therms', 'Therm'], 10**5, 'energy', ['<btu>']),
    _unit('calorie', ['cal', 'calorie', 'calories'], Fraction('4.184'), 'energy', ['<joule>']),
    _unit('Calorie', ['Cal', 'Calorie', 'Calories'], 1000, 'energy', ['<calorie>']),
    _unit('electronvolt', ['eV', 'electronvolt', 'electronvolts'], 1.602176565e-19, 'energy', ['<joule>']),
    # power
    _unit('watt', ['W', 'Watt', 'watt', 'watts'], 1, 'power', ['<joule>'], ['<second>']),
    _unit('horsepower', ['hp', 'horsepower'], 33000, 'power', ['<foot>', '<pound-force>'], ['<minute>']),
    # radiation
    _unit('gray', ['Gy', 'gray', 'grays'], 1, 'radiation', ['<joule>'], ['<kilogram>']),
    _unit('roentgen', ['R', 'roentgen'], Fraction(258, 10**6), 'radiation_exposure', ['<coulomb>'], ['<kilogram>']),
    _unit('sievert', ['Sv', 'sievert', 'sieverts'], 1, 'radiation', ['<joule>'], ['<kilogram>']),
    _unit('becquerel', ['Bq', 'becquerel', 'becquerels'], 1, 'radiation', ['<1>'], ['<second>']),
    _unit('curie', ['Ci', 'curie', 'curies'], 37, 'radiation', ['<giga>', '<becquerel>']),
    # rate
    _unit('hertz', ['Hz', 'hertz', 'Hertz'], 1, 'frequency', ['<1>'], ['<second>']),
    # angle
    _unit('degree', ['deg', 'degree', 'degrees'], numpy.pi / 180, 'angle', ['<radian>']),
    _unit('gon', ['gon', 'grad', 'gradian', 'grads'], numpy.pi / 200, 'angle', ['<radian>']),
    _unit('rotation', ['rotation'], 2 * numpy.pi, 'angle', ['<radian>']),
    _unit('rpm', ['rpm'], 1, 'angular_velocity', ['<rotation>'], ['<minute>']),
    # information
    _unit('bit', ['b', 'bit', 'bits'], Fraction(1, 8), 'information', ['<byte>']),
    # currency
    _unit('cents', ['cents'], Fraction(1, 100), 'currency', ['<dollar>']),
    # luminosity
    _unit('lumen', ['lm', 'lumen'], 1, 'luminous_power', ['<candela>', '<steradian>']),
    _unit('lux', ['lux'], 1, 'illuminance', ['<lumen>'], ['<meter>', '<meter>']),
    # electrical
    _unit('volt', ['V', 'Volt', 'volt', 'volts'], 1, 'potential', ['<watt>'], ['<ampere>']),
    _unit('farad', ['F', 'farad', 'farads'], 1, 'capacitance', ['<ampere>', '<second>'], ['<volt>']),
    _unit('coulomb', ['C', 'coulomb', 'coulombs'], 1, 'charge', ['<ampere>', '<second>']),
    _unit('siemens', ['S', 'Siemens', 'siemens'], 1, 'conductance', ['<ampere>'], ['<volt>']),
    _unit('henry', ['H', 'henry', 'henries', 'henrys'], 1, 'inductance', ['<joule>'], ['<ampere>', '<ampere>']),
    _unit('ohm', ['Ohm', 'ohm', 'ohms'], 1, 'resistance', ['<volt>'], ['<ampere>']),
    # magnetism
    _unit('weber', ['Wb', 'weber', 'webers'], 1, 'magnetism', ['<volt>', '<second>']),
    _unit('tesla', ['T', 'tesla', 'teslas'], 1, 'magnetism', ['<weber>'], ['<meter>', '<meter>']),
    _unit('gauss', ['G', 'gauss'], Fraction(1, 10**4), 'magnetism', ['<tesla>']),
    _unit('maxwell', ['Mx', 'maxwell', 'maxwells'], Fraction(1, 10**4), 'magnetism', ['<gauss>', '<meter>', '<meter>']),
    _unit('oersted', ['Oe', 'oersted', 'oersteds'], 250 / numpy.pi, 'magnetism', ['<ampere>'], ['<meter>']),
    # counting and ratios
    _unit('count', ['count'], 1, 'counting', ['<each>']),
    _unit('dozen', ['doz', 'dz', 'dozen'], 12, 'counting', ['<each>']),
    _unit('gross', ['gr', 'gross'], 12, 'counting', ['<dozen>']),
    _unit('cell', ['cells', 'cell'], 1, 'counting', ['<each>']),
    _unit('base-pair', ['bp', 'base-pair'], 1, 'counting', ['<each>']),
    _unit('nucleotide', ['nt', 'nucleotide'], 1, 'counting', ['<each>']),
    _unit('molecule', ['molecule', 'molecules'], 1, 'counting', ['<1>']),
    _unit('dot', ['dot', 'dots'], 1, 'counting', ['<each>']),
    _unit('pixel', ['px', 'pixel', 'pixels'], 1, 'counting', ['<each>']),
    _unit('ppi', ['ppi'], 1, 'counting', ['<pixel>'], ['<inch>']),
    _unit('dpi', ['dpi'], 1, 'counting', ['<dot>'], ['<inch>']),
    _unit('cpm', ['cpm'], 1, 'frequency', ['<count>'], ['<minute>']),
    _unit('dpm', ['dpm'], 1, 'frequency', ['<count>'], ['<minute>']),
    _unit('bpm', ['bpm'], 1, 'frequency', ['<count>'], ['<minute>']),
    _unit('percent', ['%', 'percent'], Fraction(1, 100), 'unitless', ['<1>']),
    _unit('ppm', ['ppm'], Fraction(1, 10**6), 'unitless', ['<1>']),
    _unit('ppb', ['ppb'], Fraction(1, 10**9), 'unitless', ['<1>']),
]


DEFINITIONS = [*_prefixes, *_base, *_derived]
"""All standard definitions, in load order."""
