import logging

from conftest import SCENARIO, SIGN, make_block, make_recording
from rangeseries.cli import main, rsdump, rsgen


def test_rsdump_and_rsgen(tmp_path, recording):
    binary = tmp_path / 'RSS.rs'
    text = tmp_path / 'RSS.txt'
    regenerated = tmp_path / 'RSS2.rs'

    binary.write_bytes(recording)

    assert main(['/usr/bin/rsdump.py', str(binary), str(text)]) == 0
    assert text.read_text().startswith('AQFT\n\nHEAD\n\nsign\n')

    assert main(['rsgen', str(text), str(regenerated)]) == 0
    assert regenerated.read_bytes() == recording


def test_rsdump_header_only(tmp_path, recording):
    binary = tmp_path / 'RSS.rs'
    text = tmp_path / 'RSS.txt'

    binary.write_bytes(recording)

    assert rsdump(['rsdump', '-h', str(binary), str(text)]) == 0
    assert 'BODY' not in text.read_text()


def test_rsdump_to_stdout(tmp_path, capsys):
    binary = tmp_path / 'RSS.rs'
    binary.write_bytes(SCENARIO)

    assert rsdump(['rsdump', str(binary)]) == 0
    assert capsys.readouterr().out == 'AQFT\n\nHEAD\n\nEND \n'


def test_usage(capsys):
    assert rsdump(['rsdump']) == 1
    assert rsdump(['rsdump', '-h']) == 1
    assert 'usage: rsdump' in capsys.readouterr().err

    assert rsgen(['rsgen', 'only-one']) == 1
    assert 'usage: rsgen' in capsys.readouterr().err

    assert main(['rsconvert', 'a', 'b']) == 1


def test_errors(tmp_path, caplog):
    missing = tmp_path / 'missing.rs'
    bad = tmp_path / 'bad.rs'
    bad.write_bytes(b'HEAD\x00\x00\x00\x00')

    with caplog.at_level(logging.ERROR):
        assert rsdump(['rsdump', str(missing)]) == 1
        assert rsdump(['rsdump', str(bad)]) == 1
        assert rsgen(['rsgen', str(missing), str(tmp_path / 'out.rs')]) == 1

    assert 'cannot open file' in caplog.text
    assert 'bad header key' in caplog.text


def test_carriage_return_through_files(tmp_path):
    sign = SIGN[:16] + b'Range series for tes\r'.ljust(64, b'\x00') + SIGN[80:]
    recording = make_recording().replace(make_block(b'sign', SIGN), make_block(b'sign', sign))

    binary = tmp_path / 'RSS.rs'
    text = tmp_path / 'RSS.txt'
    regenerated = tmp_path / 'RSS2.rs'

    binary.write_bytes(recording)

    assert rsdump(['rsdump', str(binary), str(text)]) == 0
    assert b'description:Range series for tes\r\n' in text.read_bytes()

    assert rsgen(['rsgen', str(text), str(regenerated)]) == 0
    assert regenerated.read_bytes() == recording
