import unittest
from catalog.core import SUPERGENRE_COLORS, SUPERGENRE_ORDER, Supergenre
from catalog.genres import GenreClassifier, genre_labels, repair_mojibake

class TestClassify(unittest.TestCase):
    def setUp(self):
        self.classifier = GenreClassifier()

    def test_rule_order_wins_over_specificity(self):
        # Hip-Hop rule is tested before Pop
        self.assertEqual(self.classifier.classify("Hip Hop/Pop"), Supergenre.HIP_HOP_RAP)
        # Rock rule is tested before Pop
        self.assertEqual(self.classifier.classify("pop rock"), Supergenre.ROCK_METAL)
        # "trap" inside "soul trap" hits Hip-Hop before R&B
        self.assertEqual(self.classifier.classify("soul trap"), Supergenre.HIP_HOP_RAP)

    def test_each_bucket(self):
        cases = {
            "UK Drill": Supergenre.HIP_HOP_RAP,
            "grunge": Supergenre.ROCK_METAL,
            "deep house": Supergenre.ELECTRONIC_DANCE,
            "quiet storm": Supergenre.RNB_SOUL_FUNK,
            "Bluegrass": Supergenre.COUNTRY_FOLK_AMERICANA,
            "bachata": Supergenre.LATIN,
            "soca": Supergenre.REGGAE_CARIBBEAN,
            "bossa nova": Supergenre.JAZZ_BLUES,
            "k-pop": Supergenre.POP,
            "classical": Supergenre.OTHER_UNKNOWN,
        }
        for label, expected in cases.items():
            with self.subTest(label=label):
                self.assertEqual(self.classifier.classify(label), expected)

    def test_substring_matching_is_case_insensitive(self):
        self.assertEqual(self.classifier.classify("EMO"), Supergenre.ROCK_METAL)
        self.assertEqual(self.classifier.classify("R&B"), Supergenre.RNB_SOUL_FUNK)

    def test_missing_label_is_unknown(self):
        self.assertEqual(self.classifier.classify(None), Supergenre.OTHER_UNKNOWN)
        self.assertEqual(self.classifier.classify(""), Supergenre.OTHER_UNKNOWN)

    def test_supergenre_compares_equal_to_label(self):
        self.assertEqual(self.classifier.classify("jazz"), "Jazz/Blues")


class TestSpanishEncoding(unittest.TestCase):
    def test_repair_mojibake(self):
        self.assertEqual(repair_mojibake("pop en espa√±ol"), "pop en español")
        self.assertEqual(repair_mojibake("plain"), "plain")

    def test_corrupted_and_clean_tokens_are_latin(self):
        classifier = GenreClassifier()
        self.assertEqual(classifier.classify("pop en espa√±ol"), Supergenre.LATIN)
        self.assertEqual(classifier.classify("Rock en Español"), Supergenre.ROCK_METAL)
        self.assertEqual(classifier.classify("pop en español"), Supergenre.LATIN)

    def test_legacy_encoding_only_matches_corrupted_token(self):
        classifier = GenreClassifier(legacy_encoding=True)
        self.assertEqual(classifier.classify("pop en espa√±ol"), Supergenre.LATIN)
        self.assertEqual(classifier.classify("pop en español"), Supergenre.POP)


class TestTrackGenres(unittest.TestCase):
    def setUp(self):
        self.classifier = GenreClassifier()

    def test_absent_or_blank_genres_are_unknown(self):
        for track in ({}, {"genres": None}, {"genres": []}, {"genres": ""}, {"genres": ["", "  "]}):
            with self.subTest(track=track):
                self.assertEqual(self.classifier.super_genre_of(track), Supergenre.OTHER_UNKNOWN)

    def test_first_non_blank_label_wins(self):
        track = {"genres": ["  ", "country", "pop"]}
        self.assertEqual(self.classifier.super_genre_of(track), Supergenre.COUNTRY_FOLK_AMERICANA)

    def test_single_string_genre(self):
        self.assertEqual(self.classifier.super_genre_of({"genres": " reggaeton "}), Supergenre.LATIN)

    def test_genre_labels_strips(self):
        self.assertEqual(genre_labels({"genres": [" a ", "", "b"]}), ["a", "b"])

    def test_non_list_genre_values_are_ignored(self):
        for value in (5, 3.5, True, {"name": "pop"}):
            with self.subTest(value=value):
                self.assertEqual(genre_labels({"genres": value}), [])
                self.assertEqual(self.classifier.super_genre_of({"genres": value}), Supergenre.OTHER_UNKNOWN)
        self.assertEqual(genre_labels({"genres": ("jazz", 7)}), ["jazz"])


class TestGenreDistribution(unittest.TestCase):
    def setUp(self):
        self.classifier = GenreClassifier()

    def test_multi_genre_track_counts_once_per_supergenre(self):
        tracks = [{"genres": ["pop", "rock"]}, {"genres": ["pop"]}]
        dist = self.classifier.build_genre_distribution(tracks)
        self.assertEqual([g.to_dict() for g in dist], [
            {"genre": "Pop", "count": 2},
            {"genre": "Rock/Metal", "count": 1},
        ])

    def test_same_supergenre_twice_counts_once(self):
        dist = self.classifier.build_genre_distribution([{"genres": ["dance pop", "electropop", "pop"]}])
        counts = {g.genre: g.count for g in dist}
        # "dance pop" and "electropop" are Electronic/Dance, "pop" is Pop
        self.assertEqual(counts, {Supergenre.ELECTRONIC_DANCE: 1, Supergenre.POP: 1})

    def test_canonical_order_and_zero_counts_dropped(self):
        tracks = [{"genres": "jazz"}, {"genres": "latin"}, {"genres": "pop"}, {}, {"genres": ["  "]}]
        dist = self.classifier.build_genre_distribution(tracks)
        self.assertEqual([g.genre for g in dist], [Supergenre.POP, Supergenre.LATIN, Supergenre.JAZZ_BLUES])

    def test_tracks_without_labels_are_not_counted_as_unknown(self):
        self.assertEqual(self.classifier.build_genre_distribution([{}, {"genres": []}]), [])


class TestLookupTables(unittest.TestCase):
    def test_order_and_colors_cover_all_supergenres(self):
        self.assertEqual(len(SUPERGENRE_ORDER), 10)
        self.assertEqual(set(SUPERGENRE_ORDER), set(Supergenre))
        self.assertEqual(set(SUPERGENRE_COLORS), set(Supergenre))
        self.assertEqual(SUPERGENRE_COLORS[Supergenre.POP], "#4e79a7")

    def test_colors_are_read_only(self):
        with self.assertRaises(TypeError):
            SUPERGENRE_COLORS[Supergenre.POP] = "#000000"

if __name__ == '__main__':
    unittest.main()
