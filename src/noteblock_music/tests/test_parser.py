import pytest

from noteblock_music.domain.errors import ScriptError
from noteblock_music.domain.instructions import Sequence, Sound
from noteblock_music.domain.instruments import Instrument, InstrumentResolver
from noteblock_music.domain.notes import parse_pitch
from noteblock_music.domain.parser import ScriptParser, compile_script
from noteblock_music.domain.phases import Phase


def test_sound_defaults():
    root = compile_script('PIANO,C')
    assert root.restatement == 1
    assert root.children == (
        Sound(sound_id=Instrument.PIANO, pitch=parse_pitch('C'), volume=1.0),
    )
    sound = root.children[0]
    assert (sound.restatement, sound.restatement_delay, sound.fermata) == (1, 0, 0)


def test_reference_example():
    root = compile_script('PIANO,D,2,100 PIANO,B#1')
    assert root.children == (
        Sound(
            sound_id=Instrument.PIANO,
            pitch=parse_pitch('D0'),
            volume=1.0,
            restatement=2,
            restatement_delay=100,
        ),
        Sound(sound_id=Instrument.PIANO, pitch=parse_pitch('B#1'), volume=1.0),
    )


def test_volume_and_fermata():
    first, second = compile_script('piano,c:0.5 200 BD,G,3').children
    assert first.volume == 0.5
    assert first.fermata == 200
    assert second.sound_id is Instrument.BASS_DRUM
    assert second.restatement == 3
    assert second.fermata == 0


def test_fermata_after_repeat_fields():
    (sound,) = compile_script('PIANO,C,2 300').children
    assert (sound.restatement, sound.restatement_delay, sound.fermata) == (2, 0, 300)

    (sound,) = compile_script('PIANO,C,2,40 300 ').children
    assert (sound.restatement, sound.restatement_delay, sound.fermata) == (2, 40, 300)


def test_lowercase_is_folded():
    assert compile_script('piano,c#1') == compile_script('PIANO,C#1')


def test_extra_spaces_are_separators():
    root = compile_script('PIANO,C  PIANO,D ')
    assert len(root.children) == 2
    assert all(child.fermata == 0 for child in root.children)


def test_empty_script():
    assert compile_script('') == Sequence()


def test_nested_group_fields():
    root = compile_script('(BD,G,3,20 BG,E,5,10),2,1000 1000 BANJO,A')
    group, banjo = root.children
    assert isinstance(group, Sequence)
    assert (group.restatement, group.restatement_delay, group.fermata) == (2, 1000, 1000)
    assert [child.sound_id for child in group.children] == [
        Instrument.BASS_DRUM,
        Instrument.BASS_GUITAR,
    ]
    assert group.children[1].restatement == 5
    assert group.children[1].restatement_delay == 10
    assert banjo.sound_id is Instrument.BANJO


def test_group_without_fields():
    (group,) = compile_script('(PIANO,C PIANO,D)').children
    assert (group.restatement, group.restatement_delay, group.fermata) == (1, 0, 0)
    assert len(group.children) == 2


def test_empty_group_is_a_delay_node():
    empty, sound = compile_script('(),1,0 250 PIANO,C').children
    assert empty == Sequence(fermata=250)
    assert isinstance(sound, Sound)


def test_nesting_depth_and_leaf_order():
    cases = {
        'PIANO,C': 0,
        '(PIANO,C)': 1,
        '(PIANO,C (PIANO,D) )': 2,
        '(PIANO,C (PIANO,D (PIANO,E)),2 PIANO,F)': 3,
        '((((PIANO,C))))': 4,
    }
    for script, depth in cases.items():
        root = compile_script(script)
        assert root.depth() == depth, script

    root = compile_script('(PIANO,C (PIANO,D (PIANO,E)),2 PIANO,F) PIANO,G')
    pitches = [sound.pitch for sound in root.sounds()]
    assert pitches == [parse_pitch(note) for note in 'CDEFG']


def test_unknown_instrument_is_kept_unresolved():
    (sound,) = compile_script('TUBA,C').children
    assert sound.sound_id is None
    assert sound.pitch == parse_pitch('C')


def test_custom_resolver():
    resolver = InstrumentResolver(extra_aliases={'TUBA': Instrument.BASS_GUITAR})
    (sound,) = ScriptParser(resolver).parse('tuba,c').children
    assert sound.sound_id is Instrument.BASS_GUITAR


def test_unmatched_open():
    with pytest.raises(ScriptError) as excinfo:
        compile_script('(PIANO,C')
    assert excinfo.value.index == 0

    with pytest.raises(ScriptError) as excinfo:
        compile_script('PIANO,C (PIANO,D (PIANO,E)')
    assert excinfo.value.index == 8


def test_unmatched_close():
    with pytest.raises(ScriptError) as excinfo:
        compile_script('PIANO,C)')
    assert excinfo.value.index == 7
    assert excinfo.value.phase is Phase.NOTE

    with pytest.raises(ScriptError):
        compile_script('(PIANO,C))')


@pytest.mark.parametrize(
    ('script', 'index', 'phase'),
    [
        ('PIANO,H', 6, Phase.NOTE),
        ('PIANO,C,1.5', 9, Phase.RESTATEMENT),
        ('PIANO,C:5:5', 9, Phase.NOTE),
        ('PIANO,C,1,2,3', 11, Phase.RESTATEMENT_DELAY),
        ('PIANO C', 5, Phase.INSTRUMENT),
        ('PIANO,C 100 200', 12, Phase.NEUTRAL),
        ('PIANO,C(PIANO,D)', 7, Phase.NOTE),
        ('(PIANO,C)PIANO,D', 9, Phase.END_OF_NESTED_SEQUENCE),
        ('PIANO1,C', 5, Phase.INSTRUMENT),
        (',PIANO,C', 0, Phase.NEUTRAL),
        ('PIANO,C\nPIANO,D', 7, Phase.NOTE),
    ],
)
def test_invalid_characters(script, index, phase):
    with pytest.raises(ScriptError) as excinfo:
        compile_script(script)
    assert excinfo.value.index == index
    assert excinfo.value.phase is phase


def test_invalid_field_content():
    with pytest.raises(ScriptError) as excinfo:
        compile_script('PIANO,CC PIANO,D')
    assert excinfo.value.index == 6

    with pytest.raises(ScriptError) as excinfo:
        compile_script('PIANO,C:1.2.3')
    assert excinfo.value.index == 8

    with pytest.raises(ScriptError) as excinfo:
        compile_script('PIANO,')
    assert 'nota' in excinfo.value.message

    with pytest.raises(ScriptError) as excinfo:
        compile_script('PIANO')
    assert excinfo.value.index == 5


def test_error_pointer():
    with pytest.raises(ScriptError) as excinfo:
        compile_script('PIANO,C)')
    assert excinfo.value.pointer() == 'PIANO,C)\n       ^'
    assert 'index 7' in str(excinfo.value)
