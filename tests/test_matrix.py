import unittest

from decision.modes import matrix
from models import MatrixState


def build_state() -> MatrixState:
    decision = MatrixState()
    decision = matrix.add_criterion(decision, "Cost")
    decision = matrix.add_criterion(decision, "Safety")
    decision = matrix.add_alternative(decision, "Lisbon")
    decision = matrix.add_alternative(decision, "Berlin")
    return decision


class TestMatrixTransitions(unittest.TestCase):
    def test_add_criterion_trims_and_defaults_weight(self) -> None:
        decision = matrix.add_criterion(MatrixState(), "  Cost  ")
        self.assertEqual(len(decision.criteria), 1)
        self.assertEqual(decision.criteria[0].name, "Cost")
        self.assertEqual(decision.criteria[0].weight, 3)

    def test_blank_names_are_rejected(self) -> None:
        decision = MatrixState()
        self.assertIs(matrix.add_criterion(decision, "   "), decision)
        self.assertIs(matrix.add_alternative(decision, ""), decision)
        self.assertEqual(decision, MatrixState())

    def test_add_alternative_creates_default_ratings(self) -> None:
        decision = matrix.add_criterion(MatrixState(), "Cost")
        decision = matrix.add_criterion(decision, "Safety")
        decision = matrix.add_criterion(decision, "Culture")
        decision = matrix.add_alternative(decision, "Lisbon")

        alternative_id = decision.alternatives[0].id
        self.assertEqual(len(decision.ratings), 3)
        self.assertTrue(all(rating.alternative_id == alternative_id for rating in decision.ratings))
        self.assertTrue(all(rating.score == 3 for rating in decision.ratings))
        self.assertEqual(
            [rating.criterion_id for rating in decision.ratings],
            [criterion.id for criterion in decision.criteria],
        )

    def test_add_alternative_without_criteria(self) -> None:
        decision = matrix.add_alternative(MatrixState(), "Lisbon")
        self.assertEqual(len(decision.alternatives), 1)
        self.assertEqual(decision.ratings, [])

    def test_ids_are_unique(self) -> None:
        decision = build_state()
        ids = [criterion.id for criterion in decision.criteria]
        ids += [alternative.id for alternative in decision.alternatives]
        self.assertEqual(len(ids), len(set(ids)))

    def test_remove_criterion_cascades(self) -> None:
        decision = build_state()
        cost_id, safety_id = (criterion.id for criterion in decision.criteria)
        decision = matrix.remove_criterion(decision, cost_id)

        self.assertEqual([criterion.id for criterion in decision.criteria], [safety_id])
        self.assertEqual(len(decision.ratings), 2)
        self.assertTrue(all(rating.criterion_id == safety_id for rating in decision.ratings))

    def test_remove_alternative_cascades(self) -> None:
        decision = build_state()
        lisbon_id, berlin_id = (alternative.id for alternative in decision.alternatives)
        decision = matrix.remove_alternative(decision, lisbon_id)

        self.assertEqual([alternative.name for alternative in decision.alternatives], ["Berlin"])
        self.assertEqual(len(decision.ratings), 2)
        self.assertTrue(all(rating.alternative_id == berlin_id for rating in decision.ratings))

    def test_update_criterion_weight(self) -> None:
        decision = build_state()
        cost_id = decision.criteria[0].id
        decision = matrix.update_criterion_weight(decision, cost_id, 5)
        self.assertEqual([criterion.weight for criterion in decision.criteria], [5, 3])

    def test_weights_and_scores_are_clamped(self) -> None:
        decision = build_state()
        cost_id = decision.criteria[0].id
        lisbon_id = decision.alternatives[0].id

        decision = matrix.update_criterion_weight(decision, cost_id, 9)
        self.assertEqual(decision.criteria[0].weight, 5)
        decision = matrix.update_criterion_weight(decision, cost_id, 0)
        self.assertEqual(decision.criteria[0].weight, 1)

        decision = matrix.update_rating(decision, lisbon_id, cost_id, -4)
        self.assertEqual(decision.ratings[0].score, 1)

    def test_update_rating_upserts_without_duplicates(self) -> None:
        decision = build_state()
        cost_id = decision.criteria[0].id
        lisbon_id = decision.alternatives[0].id

        decision = matrix.update_rating(decision, lisbon_id, cost_id, 4)
        decision = matrix.update_rating(decision, lisbon_id, cost_id, 5)

        matching = [
            rating
            for rating in decision.ratings
            if rating.alternative_id == lisbon_id and rating.criterion_id == cost_id
        ]
        self.assertEqual(len(matching), 1)
        self.assertEqual(matching[0].score, 5)
        self.assertEqual(len(decision.ratings), 4)

    def test_update_rating_appends_missing_pair(self) -> None:
        decision = matrix.update_rating(MatrixState(), "a", "c", 2)
        self.assertEqual(len(decision.ratings), 1)
        self.assertEqual(decision.ratings[0].score, 2)

    def test_transitions_do_not_mutate_input(self) -> None:
        decision = build_state()
        snapshot = decision.to_dict()
        cost_id = decision.criteria[0].id
        lisbon_id = decision.alternatives[0].id

        matrix.add_criterion(decision, "Culture")
        matrix.add_alternative(decision, "Madrid")
        matrix.remove_criterion(decision, cost_id)
        matrix.remove_alternative(decision, lisbon_id)
        matrix.update_criterion_weight(decision, cost_id, 1)
        matrix.update_rating(decision, lisbon_id, cost_id, 1)
        matrix.set_title(decision, "Changed")

        self.assertEqual(decision.to_dict(), snapshot)

    def test_set_title(self) -> None:
        decision = matrix.set_title(build_state(), "Which city?")
        self.assertEqual(decision.title, "Which city?")
        self.assertEqual(len(decision.criteria), 2)
