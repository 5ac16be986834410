import sys
import argparse
from scipy.io.wavfile import write as wavwrite
import numpy as np

from makewavetable import SAMPLE_RATE, MIDPOINT, PeriodNotDetected, wave_table

# 8-bit mono morse keyer; the sidetone is one period of the wave table
# looped for as long as the key is down.

srate = int(SAMPLE_RATE)
DEFAULT_WPM = 20
DEFAULT_FREQ = 600.
DEFAULT_WORD = 'KD9KJV'
ELEMENTS_PER_WORD = 50  # "PARIS"
FADE_LEN = 220  # ~5ms at 44.1kHz

code = {
    'A': '.-',     'B': '-...',   'C': '-.-.',   'D': '-..',
    'E': '.',      'F': '..-.',   'G': '--.',    'H': '....',
    'I': '..',     'J': '.---',   'K': '-.-',    'L': '.-..',
    'M': '--',     'N': '-.',     'O': '---',    'P': '.--.',
    'Q': '--.-',   'R': '.-.',    'S': '...',    'T': '-',
    'U': '..-',    'V': '...-',   'W': '.--',    'X': '-..-',
    'Y': '-.--',   'Z': '--..',   '0': '-----',  '1': '.----',
    '2': '..---',  '3': '...--',  '4': '....-',  '5': '.....',
    '6': '-....',  '7': '--...',  '8': '---..',  '9': '----.',
    '?': '..--..', ',': '--..--', '.': '.-.-.-', '/': '-..-.',
}


def lookup(c):
    try:
        return code[c]
    except KeyError:
        raise ValueError('unknown character {!r}'.format(c)) from None


def samples_per_element(wpm):
    if wpm <= 0:
        raise ValueError('wpm must be positive, got {}'.format(wpm))
    return int(srate * 60 / (wpm * ELEMENTS_PER_WORD))


def schedule_character(unit, pattern):
    """(ismake, samples) pairs for one character.

    dot = 1 unit, dash = 3 units, 1 unit between elements and 3 after the
    character.
    """
    out = []
    for c in pattern:
        if c == '.':
            out.append((True, unit))
        elif c == '-':
            out.append((True, 3 * unit))
        out.append((False, unit))
    if out:
        out[-1] = (False, 3 * unit)
    return out


def schedule_word(unit, word):
    out = []
    for c in word:
        out += schedule_character(unit, lookup(c.upper()))
    if out:
        out[-1] = (False, 7 * unit)
    return out


def tone(table, duration):
    wavea = np.resize(np.array(table, dtype=np.float64), duration)
    n = min(FADE_LEN, duration)
    if n > 0:
        # linear fade down to the midpoint to avoid a click
        scale = np.arange(n - 1, -1, -1) / n
        wavea[duration - n:] = (wavea[duration - n:] - MIDPOINT) * scale \
            + MIDPOINT
    return wavea.astype(np.uint8)


def render(word, wpm=DEFAULT_WPM, freq=DEFAULT_FREQ):
    unit = samples_per_element(wpm)
    table = wave_table(freq)
    wavea = np.array([], dtype=np.uint8)
    for ismake, duration in schedule_word(unit, word):
        if ismake:
            wavea = np.append(wavea, tone(table, duration))
        else:
            wavea = np.append(wavea,
                              np.full(duration, MIDPOINT, dtype=np.uint8))
    return wavea


def morseout(word, filename, wpm=DEFAULT_WPM, freq=DEFAULT_FREQ):
    wavea = render(word, wpm, freq)
    wavwrite(filename, srate, wavea)
    print('morseout {}: {} samples -> {}'.format(word, len(wavea), filename),
          file=sys.stderr)
    return wavea


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='key a word in morse code into an 8-bit wav file')
    parser.add_argument('word', nargs='?', default=DEFAULT_WORD)
    parser.add_argument('-w', '--wpm', type=int, default=DEFAULT_WPM)
    parser.add_argument('-o', '--output', default='output.wav')
    parser.add_argument('-f', '--freq', type=float, default=DEFAULT_FREQ,
                        help='sidetone freq in Hz (default %(default)s)')
    args = parser.parse_args(argv)

    try:
        morseout(args.word, args.output, args.wpm, args.freq)
    except (ValueError, PeriodNotDetected) as e:
        print('makemorse.py: {}'.format(e), file=sys.stderr)
        sys.exit(1)
    return 0


if __name__ == '__main__':
    sys.exit(main())
