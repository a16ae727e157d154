import itertools
import unittest
from .annotations import (
    Classification,
    classify,
    LB_TYPE_ANNOTATION,
    LB_PROXY_PROTOCOL_ANNOTATION,
    OPERATOR_MARKER_ANNOTATION,
)

MISSING = object()

def build_annotations(lb_type, lb_proxy, marker):
    annotations = {"unrelated/annotation": "value"}
    for key, value in ((LB_TYPE_ANNOTATION, lb_type),
                       (LB_PROXY_PROTOCOL_ANNOTATION, lb_proxy),
                       (OPERATOR_MARKER_ANNOTATION, marker)):
        if value is not MISSING:
            annotations[key] = value
    return annotations

class TestClassify(unittest.TestCase):
    def test_fully_marked_nlb_service_is_ignored(self):
        annotations = build_annotations("nlb", "*", "*")
        self.assertIs(classify(annotations), Classification.IGNORE)

    def test_unmarked_nlb_service_requests_enable(self):
        self.assertIs(classify(build_annotations("nlb", "*", MISSING)), Classification.ENABLE_REQUESTED)
        self.assertIs(classify(build_annotations("nlb", "*", "done")), Classification.ENABLE_REQUESTED)

    def test_marker_without_intent_requests_disable(self):
        self.assertIs(classify(build_annotations(MISSING, MISSING, "*")), Classification.DISABLE_REQUESTED)
        self.assertIs(classify(build_annotations("nlb", MISSING, "*")), Classification.DISABLE_REQUESTED)
        self.assertIs(classify(build_annotations("external", "*", "*")), Classification.DISABLE_REQUESTED)

    def test_plain_service_is_ignored(self):
        self.assertIs(classify({}), Classification.IGNORE)
        self.assertIs(classify(None), Classification.IGNORE)
        self.assertIs(classify(build_annotations("nlb", "tcp", MISSING)), Classification.IGNORE)

    def test_every_combination_is_classified(self):
        """Each combination of matching, non-matching and absent values maps to the decision table"""
        lb_types = ["nlb", "clb", MISSING]
        proxies = ["*", "tcp", MISSING]
        markers = ["*", "false", MISSING]
        for lb_type, lb_proxy, marker in itertools.product(lb_types, proxies, markers):
            with self.subTest(lb_type=lb_type, lb_proxy=lb_proxy, marker=marker):
                requested = lb_type == "nlb" and lb_proxy == "*"
                marked = marker == "*"
                if requested and marked:
                    expected = Classification.IGNORE
                elif requested:
                    expected = Classification.ENABLE_REQUESTED
                elif marked:
                    expected = Classification.DISABLE_REQUESTED
                else:
                    expected = Classification.IGNORE
                self.assertIs(classify(build_annotations(lb_type, lb_proxy, marker)), expected)

    def test_desired_state(self):
        self.assertTrue(Classification.ENABLE_REQUESTED.desired_state)
        self.assertFalse(Classification.DISABLE_REQUESTED.desired_state)
        self.assertIsNone(Classification.IGNORE.desired_state)

if __name__ == '__main__':
    unittest.main()
