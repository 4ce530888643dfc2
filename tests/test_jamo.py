import logging

from gametext.jamo import (
    JamoSequenceCollector,
    pack_jamo,
    retag_korean,
    unpack_sequence,
)


def test_passthrough_span_is_copied_verbatim() -> None:
    assert retag_korean(bytes([0x03, 0x41, 0x42])) == b"AB"


def test_component_span_tags_normal_and_alternate_glyphs() -> None:
    payload = bytes([0x04, 0x02, 0x06, 0x05, 0x15])

    assert retag_korean(payload) == bytes([0x03, 0x06, 0x01, 0x15])


def test_spans_alternate_until_terminators() -> None:
    payload = bytes([0x03, 0x41, 0x04, 0x01, 0x06, 0x03, 0x42])

    assert retag_korean(payload) == bytes([0x41, 0x03, 0x06, 0x42])


def test_truncated_spans_stop_cleanly() -> None:
    assert retag_korean(bytes([0x04])) == b""
    assert retag_korean(bytes([0x04, 0x02, 0x05])) == b""


def test_collector_records_packed_sequences() -> None:
    collector = JamoSequenceCollector()

    retag_korean(bytes([0x04, 0x02, 0x06, 0x05, 0x15]), collector=collector)
    retag_korean(bytes([0x04, 0x02, 0x06, 0x05, 0x15]), collector=collector)

    assert collector.sequences == {0x0115_0306}
    assert collector.jamo_by_position() == [[0x306], [0x115], [], []]
    assert collector.all_jamo() == [(0x115, 2), (0x306, 1)]


def test_sequences_keep_at_most_four_components() -> None:
    collector = JamoSequenceCollector()

    payload = bytes([0x04, 0x05, 0x01, 0x02, 0x13, 0x14, 0x15])
    output = retag_korean(payload, collector=collector)

    assert len(output) == 10
    (sequence,) = collector.sequences
    assert unpack_sequence(sequence) == [0x301, 0x302, 0x313, 0x314]


def test_pack_jamo_places_keys_by_position() -> None:
    assert pack_jamo(0, 0x06, alternate=False) == 0x306
    assert pack_jamo(1, 0x15, alternate=True) == 0x115 << 16


def test_log_report_emits_lines_and_clears(caplog) -> None:
    collector = JamoSequenceCollector()
    retag_korean(bytes([0x04, 0x01, 0x06]), collector=collector)

    with caplog.at_level(logging.INFO, logger="gametext.jamo"):
        collector.log_report()

    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "all seqs:"
    assert "all first jamo:" in messages
    assert "0x306" in messages
    assert "306 pos 1" in messages
    assert collector.sequences == set()


def test_empty_collector_reports_nothing() -> None:
    assert JamoSequenceCollector().report() == []
