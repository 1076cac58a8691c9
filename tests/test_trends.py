import math
import unittest
from catalog.trends import load_feature_table, yearly_feature_means

FEATURES_CSV = """track_name,date,energy,valence,acousticness
A,2001-04-01,0.8,0.6,0.1
B,2001-09-12,0.6,0.2,0.3
C,1999-01-01,0.5,,0.9
D,not a date,0.1,0.1,0.1
E,1999-06-30T00:00:00,0.7,0.4,n/a
"""


class TestYearlyFeatureMeans(unittest.TestCase):
    def test_means_by_year(self):
        result = yearly_feature_means(load_feature_table(FEATURES_CSV))
        self.assertEqual([r["year"] for r in result], [1999, 2001])

        y1999, y2001 = result
        self.assertAlmostEqual(y2001["energy"], 0.7)
        self.assertAlmostEqual(y2001["valence"], 0.4)
        self.assertAlmostEqual(y2001["acousticness"], 0.2)
        # blank and non-numeric cells are left out of the mean
        self.assertAlmostEqual(y1999["energy"], 0.6)
        self.assertAlmostEqual(y1999["valence"], 0.4)
        self.assertAlmostEqual(y1999["acousticness"], 0.9)

    def test_feature_without_values_is_nan(self):
        result = yearly_feature_means([{"date": "2010-01-01", "energy": ""}], features=("energy",))
        self.assertEqual(result[0]["year"], 2010)
        self.assertTrue(math.isnan(result[0]["energy"]))

    def test_empty_input(self):
        self.assertEqual(yearly_feature_means([]), [])

    def test_year_only_and_year_month_dates(self):
        rows = [
            {"date": "1999", "energy": "0.2"},
            {"date": "1999-05", "energy": "0.4"},
            {"date": "2003-11-02", "energy": "0.9"},
            {"date": "99", "energy": "0.1"},
        ]
        result = yearly_feature_means(rows, features=("energy",))
        self.assertEqual([r["year"] for r in result], [1999, 2003])
        self.assertAlmostEqual(result[0]["energy"], 0.3)

if __name__ == '__main__':
    unittest.main()
