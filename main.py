import argparse
import sys

from letter_graph import ADJACENCY_STRATEGIES, bounding_box_adjacency, build_letter_graph, extract_words
from letter_node import load_observations
from snatch_solver import AnagramDictionary, SnatchSolver


class SnatchAssistant:
    """
    Turns the tiles seen on the table into words and finds the snatches.

    Observations come from the tile detector and letter recognizer (or a
    fixture file); every call works on a fresh graph.
    """

    def __init__(self, dictionary=None, is_adjacent=bounding_box_adjacency):
        """
        Args:
            dictionary: AnagramDictionary to use (shared instance if None)
            is_adjacent: Adjacency predicate for the letter graph
        """
        self.solver = SnatchSolver(dictionary)
        self.is_adjacent = is_adjacent

    @property
    def dictionary(self):
        return self.solver.dictionary

    def generate_words(self, observations):
        """Words currently on the table, one per group of touching tiles."""
        graph = build_letter_graph(observations, self.is_adjacent)
        return extract_words(graph)

    def validate_word(self, word):
        """
        Validate a word against the dictionary.
        Returns (is_valid, suggestions) where suggestions is a list of possible corrections.
        """
        if word.upper() in self.dictionary:
            return True, []
        return False, self.dictionary.find_similar_words(word)

    def process(self, observations, suggest=False):
        """
        Run the whole pipeline on one set of observations.

        Returns dict with:
            - words: words on the table
            - snatchable: snatchable words (duplicates kept)
            - snatches: snatchable word -> combinations forming it
            - validations: (word, is_valid, suggestions) per word, if suggest
        """
        words = self.generate_words(observations)
        snatches = self.solver.find_snatches(words)
        snatchable = [word for word, subsets in snatches.items() for _ in subsets]

        validations = []
        if suggest:
            validations = [(word, *self.validate_word(word)) for word in words]

        return {
            'words': words,
            'snatchable': snatchable,
            'snatches': snatches,
            'validations': validations,
        }


def print_report(result, unique=False):
    """Print the words on the table and what can be snatched."""
    print(f"\n{'='*40}")
    print(f"Words on the table ({len(result['words'])}):")
    for word in result['words']:
        print(f"  {word}")

    if result['validations']:
        print(f"\nNot in dictionary:")
        for word, is_valid, suggestions in result['validations']:
            if is_valid:
                continue
            hint = ', '.join(suggestions) if suggestions else 'no suggestions'
            print(f"  {word} -> {hint}")

    count = len(result['snatches']) if unique else len(result['snatchable'])
    print(f"\nSnatchable words ({count}):")
    # One line per distinct word, each combination listed once
    for word, subsets in result['snatches'].items():
        combos = ' | '.join(' + '.join(subset) for subset in subsets)
        print(f"  {word:<12} from {combos}")
    print(f"{'='*40}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Find snatchable words from detected tiles')
    parser.add_argument('observations', type=str, help='JSON file of letter observations')
    parser.add_argument('--dictionary', type=str, default=None,
                        help='Word list, one word per line (default: words.txt or $SNATCH_DICTIONARY)')
    parser.add_argument('--adjacency', choices=sorted(ADJACENCY_STRATEGIES), default='bounding-box',
                        help='Rule deciding which tiles touch')
    parser.add_argument('--unique', action='store_true', help='Count each snatchable word once')
    parser.add_argument('--suggest', action='store_true',
                        help='Suggest corrections for words not in the dictionary (OCR misreads)')

    args = parser.parse_args(argv)

    try:
        observations = load_observations(args.observations)
    except (OSError, ValueError) as e:
        print(f"Error reading observations: {e}")
        return 1

    try:
        dictionary = AnagramDictionary.get_instance(args.dictionary)
    except RuntimeError as e:
        print(f"Error: {e}")
        return 1

    print(f"Read {len(observations)} tiles from {args.observations}")

    assistant = SnatchAssistant(dictionary, ADJACENCY_STRATEGIES[args.adjacency])
    result = assistant.process(observations, suggest=args.suggest)
    print_report(result, unique=args.unique)
    return 0


if __name__ == "__main__":
    sys.exit(main())
