import sys
import math
import argparse
import matplotlib.pyplot as plt

# one period of a sine tone, quantized to u8, printed as a rust array
# (the walk normally ends long before CEILING samples)

SAMPLE_RATE = 44100.
DEFAULT_FREQ = 588.
CEILING = 2647
MIDPOINT = 128


class PeriodNotDetected(Exception):
    def __init__(self, freq, ceiling=CEILING):
        self.freq = freq
        self.ceiling = ceiling
        super().__init__(
            'period not detected within {} samples (wave freq {})'.format(
                ceiling, freq))


def quantize(freq, x):
    return math.floor(
        (math.sin(((freq * x) / SAMPLE_RATE) * 2. * math.pi) + 1.) * 128.)


def samples(freq, ceiling=CEILING):
    """Yield the quantized samples of one period.

    The period ends on the first sample above the midpoint seen after the
    wave has dipped below it; that sample is yielded last.  Samples equal to
    the midpoint never change state.  Raises PeriodNotDetected if the walk
    reaches `ceiling` samples first.
    """
    half_crossing = False
    for x in range(ceiling):
        sample = quantize(freq, x)
        if sample < MIDPOINT:
            half_crossing = True
        if sample > MIDPOINT and half_crossing:
            yield sample
            return
        yield sample
    raise PeriodNotDetected(freq, ceiling)


def wave_table(freq, ceiling=CEILING):
    return list(samples(freq, ceiling))


def format_table(table, newline=True):
    s = 'const WAV: [u8; {}] = [{}];'.format(
        len(table), ', '.join(str(v) for v in table))
    if newline:
        s += '\n'
    return s


def plot_table(table, freq):
    x = [i for i in range(len(table))]
    plt.step(x, table, where='post')
    plt.axhline(MIDPOINT, color='gray', linewidth=.5)
    plt.title('{} Hz @ {} Hz, {} samples'.format(freq, SAMPLE_RATE, len(table)))
    plt.show()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='print one period of a quantized sine wave as a rust array')
    parser.add_argument('-f', '--freq', type=float, default=DEFAULT_FREQ,
                        help='wave freq in Hz (default %(default)s)')
    parser.add_argument('--no-newline', action='store_true',
                        help='do not end the output with a newline')
    parser.add_argument('--plot', action='store_true',
                        help='plot the period after printing it')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    if args.verbose:
        print('sampling freq {}, wave freq {}'.format(SAMPLE_RATE, args.freq),
              file=sys.stderr)
    try:
        table = wave_table(args.freq)
    except PeriodNotDetected as e:
        print('makewavetable.py: {}'.format(e), file=sys.stderr)
        sys.exit(1)
    if args.verbose:
        print('{} samples'.format(len(table)), file=sys.stderr)

    sys.stdout.write(format_table(table, newline=not args.no_newline))
    sys.stdout.flush()

    if args.plot:
        plot_table(table, args.freq)
    return 0


if __name__ == '__main__':
    sys.exit(main())
