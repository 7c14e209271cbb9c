"""Tests for recovering JSON from malformed LLM output."""

import json
import time
import unittest

from projectbridge.repair.json_repair import (
    LIGHT_REPAIR_STEPS,
    balance_brackets_and_braces,
    extract_json_from_text,
    extract_valid_json_subset,
    fix_missing_colons,
    fix_missing_commas_before_keys,
    fix_missing_commas_between_containers,
    fix_missing_commas_in_arrays,
    fix_position_specific_issue,
    fix_single_quotes,
    fix_trailing_commas,
    fix_unclosed_arrays_before_properties,
    fix_unquoted_property_names,
    light_repair,
    repair_json,
    safe_parse_json,
)


def _fix_reported_error(text: str) -> str:
    try:
        json.loads(text)
    except json.JSONDecodeError as e:
        return fix_position_specific_issue(text, e.pos, e.msg)
    raise AssertionError(f"{text!r} already parses")


class RepairStepTests(unittest.TestCase):
    def test_missing_comma_between_array_strings(self) -> None:
        fixed = fix_missing_commas_in_arrays('["React" "Node.js" "CSS"]')
        self.assertEqual(json.loads(fixed), ["React", "Node.js", "CSS"])

    def test_missing_comma_between_containers(self) -> None:
        fixed = fix_missing_commas_between_containers('[{"a": 1}{"b": 2}]')
        self.assertEqual(json.loads(fixed), [{"a": 1}, {"b": 2}])

    def test_missing_comma_before_key(self) -> None:
        fixed = fix_missing_commas_before_keys('{"a": 1 "b": "x"}')
        self.assertEqual(json.loads(fixed), {"a": 1, "b": "x"})

    def test_missing_colon(self) -> None:
        fixed = fix_missing_colons('{"name" "React"}')
        self.assertEqual(json.loads(fixed), {"name": "React"})

    def test_trailing_commas(self) -> None:
        fixed = fix_trailing_commas('{"a": [1, 2,], "b": 3,}')
        self.assertEqual(json.loads(fixed), {"a": [1, 2], "b": 3})

    def test_trailing_comma_inside_string_is_kept(self) -> None:
        self.assertEqual(fix_trailing_commas('{"a": "x,}"}'), '{"a": "x,}"}')

    def test_single_quotes(self) -> None:
        fixed = fix_single_quotes("{'name': 'React', 'level': 'Advanced'}")
        self.assertEqual(json.loads(fixed), {"name": "React", "level": "Advanced"})

    def test_unquoted_property_names(self) -> None:
        fixed = fix_unquoted_property_names('{name: "React", years: 3}')
        self.assertEqual(json.loads(fixed), {"name": "React", "years": 3})

    def test_unclosed_array_before_property(self) -> None:
        fixed = fix_unclosed_arrays_before_properties('{"skills": ["a", "b", "experience": "5 years"}')
        self.assertEqual(json.loads(fixed), {"skills": ["a", "b"], "experience": "5 years"})

    def test_steps_leave_valid_json_alone(self) -> None:
        text = '{"technical": ["React", "Node.js"], "nested": [{"a": "b, c"}], "n": 1.5}'
        for step in LIGHT_REPAIR_STEPS:
            self.assertEqual(step(text), text, step.__name__)

    def test_steps_are_idempotent(self) -> None:
        text = '{"technical": ["React" "Node.js"], soft: [\'Leadership\'],}'
        once = light_repair(text)
        self.assertEqual(light_repair(once), once)

    def test_balance_closes_truncated_output(self) -> None:
        fixed = balance_brackets_and_braces('{"technical": ["React", "Node.js"], "soft": ["Lead')
        self.assertEqual(json.loads(fixed), {"technical": ["React", "Node.js"], "soft": ["Lead"]})

    def test_balance_drops_dangling_key(self) -> None:
        fixed = balance_brackets_and_braces('{"a": 1, "b":')
        self.assertEqual(json.loads(fixed), {"a": 1})

    def test_position_fix_extra_data(self) -> None:
        text = '{"a": 1} trailing words'
        with self.assertRaises(json.JSONDecodeError) as ctx:
            json.loads(text)
        fixed = fix_position_specific_issue(text, ctx.exception.pos, ctx.exception.msg)
        self.assertEqual(json.loads(fixed), {"a": 1})

    def test_position_fix_python_literal(self) -> None:
        text = '{"active": True}'
        with self.assertRaises(json.JSONDecodeError) as ctx:
            json.loads(text)
        fixed = fix_position_specific_issue(text, ctx.exception.pos, ctx.exception.msg)
        self.assertEqual(json.loads(fixed), {"active": True})

    def test_position_fix_missing_colon(self) -> None:
        self.assertEqual(json.loads(_fix_reported_error('{"a" 1}')), {"a": 1})

    def test_position_fix_missing_comma_in_object(self) -> None:
        self.assertEqual(json.loads(_fix_reported_error('{"a": 1 "b": 2}')), {"a": 1, "b": 2})

    def test_position_fix_missing_comma_in_array(self) -> None:
        self.assertEqual(json.loads(_fix_reported_error('["a" "b"]')), ["a", "b"])

    def test_position_fix_array_running_into_key(self) -> None:
        fixed = _fix_reported_error('{"skills": ["a", "b" "level": 3}')
        self.assertEqual(json.loads(fixed), {"skills": ["a", "b"], "level": 3})

    def test_position_fix_trailing_comma_in_object(self) -> None:
        self.assertEqual(json.loads(_fix_reported_error('{"a": 1,}')), {"a": 1})

    def test_position_fix_bare_property_name(self) -> None:
        self.assertEqual(json.loads(_fix_reported_error('{name: "React"}')), {"name": "React"})

    def test_position_fix_unterminated_string(self) -> None:
        fixed = _fix_reported_error('{"a": "abc')
        self.assertEqual(fixed, '{"a": "abc"')
        self.assertEqual(json.loads(balance_brackets_and_braces(fixed)), {"a": "abc"})

    def test_position_fix_unterminated_string_with_dangling_escape(self) -> None:
        self.assertEqual(_fix_reported_error('{"a": "abc\\'), '{"a": "abc"')

    def test_position_fix_control_character(self) -> None:
        self.assertEqual(json.loads(_fix_reported_error('{"a": "line1\nline2"}')), {"a": "line1\nline2"})

    def test_position_fix_invalid_escape(self) -> None:
        self.assertEqual(json.loads(_fix_reported_error('{"path": "C:\\q"}')), {"path": "C:\\q"})

    def test_position_fix_out_of_range_is_noop(self) -> None:
        self.assertEqual(fix_position_specific_issue("{", 99, "Expecting value"), "{")


class RepairJsonTests(unittest.TestCase):
    def test_valid_json_is_returned_unchanged(self) -> None:
        for text in ('{"a": [1, 2, {"b": null}]}', "[]", '"plain"', "42", '{"s": "it\'s // not a comment"}'):
            self.assertEqual(repair_json(text), text)
            self.assertEqual(json.loads(repair_json(text)), json.loads(text))

    def test_malformed_llm_output(self) -> None:
        text = '{"technical": ["React" "Node.js"], "soft": ["Leadership"],}'
        self.assertEqual(json.loads(repair_json(text)), {"technical": ["React", "Node.js"], "soft": ["Leadership"]})

    def test_code_fence_and_prose(self) -> None:
        text = 'Sure! Here is the JSON:\n```json\n{"technical": ["Python"], "soft": []}\n```\nLet me know.'
        self.assertEqual(json.loads(repair_json(text)), {"technical": ["Python"], "soft": []})

    def test_comments(self) -> None:
        text = '{\n  "a": 1, // first\n  /* block */ "b": 2\n}'
        self.assertEqual(json.loads(repair_json(text)), {"a": 1, "b": 2})

    def test_truncated_nested_output(self) -> None:
        text = '{"matchPercentage": 70, "missingSkills": [{"name": "Docker", "priority": "High"}, {"name": "Kube'
        data = json.loads(repair_json(text))
        self.assertEqual(data["matchPercentage"], 70)
        self.assertEqual(data["missingSkills"][0], {"name": "Docker", "priority": "High"})
        self.assertEqual(data["missingSkills"][1], {"name": "Kube"})

    def test_non_string_input(self) -> None:
        self.assertEqual(repair_json(None), "{}")


class ExtractionTests(unittest.TestCase):
    def test_extract_object_from_prose(self) -> None:
        self.assertEqual(extract_json_from_text('Result: {"a": 1} hope this helps'), {"a": 1})

    def test_extract_array_from_prose(self) -> None:
        self.assertEqual(extract_json_from_text('Skills: ["React", "CSS"].'), ["React", "CSS"])

    def test_extract_prefers_outermost_container(self) -> None:
        # truncated object: the inner array alone is not the payload
        self.assertIsNone(extract_json_from_text('{"technical": ["React", "Node.js"], "soft": ["Lead'))

    def test_extract_without_json(self) -> None:
        self.assertIsNone(extract_json_from_text("no json here"))

    def test_subset_salvages_complete_fragments(self) -> None:
        text = '"summary": "Good fit", "technical": ["React", "CSS"], "broken": [1 2 @@'
        data = extract_valid_json_subset(text)
        self.assertEqual(data["summary"], "Good fit")
        self.assertEqual(data["technical"], ["React", "CSS"])
        self.assertIn("broken", data)

    def test_subset_repairs_value_within_its_own_extent(self) -> None:
        data = extract_valid_json_subset('"a": {"x": [1 2}, "b": "ok"')
        self.assertEqual(data, {"a": {"x": [1, 2]}, "b": "ok"})

    def test_subset_scan_stays_fast_on_large_broken_output(self) -> None:
        text = "{" + "".join('"k%d": {"x": [1, 2 3 "y" ::: } } ] ,,, ' % i for i in range(600))
        fallback = {"fallback": True}
        start = time.perf_counter()
        result = safe_parse_json(text, fallback)
        elapsed = time.perf_counter() - start
        self.assertTrue(result is fallback or isinstance(result, (dict, list)))
        self.assertLess(elapsed, 2.0)

    def test_subset_nothing_found(self) -> None:
        self.assertIsNone(extract_valid_json_subset("nothing useful"))


class SafeParseTests(unittest.TestCase):
    def test_never_raises(self) -> None:
        fallback = {"fallback": True}
        inputs = [
            "", " ", "{", "}", "[[[", "]]]", '"', "\x00\xff\xfe{{{", "null", "{'a': }",
            '{"a": [1, 2', '{"a": "b" "c": }', "```json\n```", "{" * 500, "]" * 200 + "{",
            '{"a": "\\', "{:}", "[,,,]", "{,}", '{"a"', "﻿{}",
        ]
        for text in inputs:
            result = safe_parse_json(text, fallback)
            self.assertTrue(result is fallback or isinstance(result, (dict, list)), repr(text))

    def test_non_string_returns_fallback(self) -> None:
        fallback = {"x": 1}
        self.assertIs(safe_parse_json(None, fallback), fallback)
        self.assertIs(safe_parse_json(b'{"a": 1}', fallback), fallback)

    def test_plain_prose_returns_fallback(self) -> None:
        fallback = {"x": 1}
        self.assertIs(safe_parse_json("I could not analyze this resume.", fallback), fallback)

    def test_malformed_llm_output(self) -> None:
        text = '{"technical": ["React" "Node.js"], "soft": ["Leadership"],}'
        self.assertEqual(safe_parse_json(text), {"technical": ["React", "Node.js"], "soft": ["Leadership"]})

    def test_valid_json(self) -> None:
        self.assertEqual(safe_parse_json('{"a": [1, 2]}'), {"a": [1, 2]})

    def test_truncated_output(self) -> None:
        self.assertEqual(
            safe_parse_json('{"technical": ["React", "Node.js"], "soft": ["Lead'),
            {"technical": ["React", "Node.js"], "soft": ["Lead"]},
        )


if __name__ == "__main__":
    unittest.main()
