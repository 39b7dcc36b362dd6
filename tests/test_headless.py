"""
Tests for the headless tick-script renderer and frame export.

Covers:
- Tick parsing (cursor, click, mode, errors)
- Script replay writing PNG frames
- The CLI entry point against the bundled example scripts
- frame_to_image / save_frame
"""
import json
import os
import random
import pytest
from PIL import Image

import headless
from headless import ScriptError, parse_tick, load_script, run_script
from components.scene import Scene
from models.input import ClickState, EditMode
from models.transform import Vec2
from services.frame_export import frame_to_image, save_frame
from constants import BACKGROUND_COLOR


# ══════════════════════════════════════════════════════════════════════════
# Script parsing
# ══════════════════════════════════════════════════════════════════════════

class TestParseTick:

    def test_empty_tick(self):
        sample, mode = parse_tick({}, EditMode.DUAL)
        assert sample.cursor is None
        assert sample.click is ClickState.IDLE
        assert mode is EditMode.DUAL

    def test_full_tick(self):
        sample, mode = parse_tick({'x': 10, 'y': 20.5, 'click': 'Pressed', 'mode': 'view'}, EditMode.DUAL)
        assert sample.cursor == Vec2(10.0, 20.5)
        assert sample.click is ClickState.PRESSED
        assert mode is EditMode.VIEW

    def test_default_mode_used(self):
        _, mode = parse_tick({'x': 1, 'y': 1}, EditMode.EDIT)
        assert mode is EditMode.EDIT

    @pytest.mark.parametrize("entry", [
        {'x': 5},
        {'click': 'tapped'},
        {'mode': 'wireframe'},
        {'x': 'left', 'y': 2},
        [1, 2],
    ])
    def test_invalid_tick(self, entry):
        with pytest.raises(ScriptError):
            parse_tick(entry, EditMode.DUAL)


class TestLoadScript:

    def test_examples_parse(self, examples_dir):
        for name in ('drag_seed.json', 'spawn_and_spin.json'):
            ticks = load_script(os.path.join(examples_dir, name))
            assert len(ticks) > 0

    def test_not_a_list(self, tmp_path):
        path = tmp_path / 'script.json'
        path.write_text('{"x": 1}')
        with pytest.raises(ScriptError):
            load_script(str(path))

    def test_bad_json(self, tmp_path):
        path = tmp_path / 'script.json'
        path.write_text('[{]')
        with pytest.raises(ScriptError):
            load_script(str(path))


# ══════════════════════════════════════════════════════════════════════════
# Replay
# ══════════════════════════════════════════════════════════════════════════

class TestRunScript:

    def test_final_frame_only(self, tmp_path, scene):
        ticks = [parse_tick({}, EditMode.DUAL) for _ in range(3)]
        written = run_script(scene, ticks, str(tmp_path))
        assert [os.path.basename(p) for p in written] == ['frame_00003.png']

    def test_every_nth(self, tmp_path, scene):
        ticks = [parse_tick({}, EditMode.DUAL) for _ in range(5)]
        written = run_script(scene, ticks, str(tmp_path), every=2)
        names = [os.path.basename(p) for p in written]
        assert names == ['frame_00002.png', 'frame_00004.png', 'frame_00005.png']

    def test_drag_moves_seed(self, tmp_path, scene, examples_dir):
        ticks = load_script(os.path.join(examples_dir, 'drag_seed.json'))
        run_script(scene, ticks, str(tmp_path))
        assert scene.objects[0].transform.position == Vec2(480, 270)

    def test_spawn_script(self, tmp_path, scene, examples_dir):
        ticks = load_script(os.path.join(examples_dir, 'spawn_and_spin.json'))
        run_script(scene, ticks, str(tmp_path))
        assert len(scene.objects) == 2


class TestMain:

    def test_renders_png(self, tmp_path, examples_dir):
        out = tmp_path / 'renders'
        code = headless.main([
            os.path.join(examples_dir, 'drag_seed.json'),
            '-o', str(out), '--seed', '3',
        ])
        assert code == 0
        files = sorted(os.listdir(out))
        assert len(files) == 1
        with Image.open(out / files[0]) as image:
            assert image.size == (800, 600)
            assert image.mode == 'RGBA'

    def test_custom_size(self, tmp_path):
        script = tmp_path / 'script.json'
        script.write_text(json.dumps([{}]))
        code = headless.main([str(script), '-o', str(tmp_path), '--width', '320', '--height', '240'])
        assert code == 0
        with Image.open(tmp_path / 'frame_00001.png') as image:
            assert image.size == (320, 240)

    def test_missing_script(self, tmp_path):
        assert headless.main([str(tmp_path / 'nope.json')]) == 1

    def test_invalid_script(self, tmp_path):
        script = tmp_path / 'script.json'
        script.write_text(json.dumps([{'click': 'tapped'}]))
        assert headless.main([str(script), '-o', str(tmp_path)]) == 1

    def test_invalid_size(self, tmp_path):
        script = tmp_path / 'script.json'
        script.write_text(json.dumps([{}]))
        assert headless.main([str(script), '-o', str(tmp_path), '--width', '10']) == 1

    def test_empty_script(self, tmp_path):
        script = tmp_path / 'script.json'
        script.write_text('[]')
        assert headless.main([str(script), '-o', str(tmp_path)]) == 1


# ══════════════════════════════════════════════════════════════════════════
# Frame export
# ══════════════════════════════════════════════════════════════════════════

class TestFrameExport:

    def test_frame_to_image(self):
        scene = Scene(320, 240, rng=random.Random(0))
        image = frame_to_image(scene.frame, 320, 240)
        assert image.size == (320, 240)
        assert image.getpixel((319, 239)) == BACKGROUND_COLOR + (255,)

    def test_wrong_size(self):
        with pytest.raises(ValueError):
            frame_to_image(bytes(10), 320, 240)

    def test_save_frame_creates_directories(self, tmp_path):
        scene = Scene(320, 240)
        path = str(tmp_path / 'a' / 'b' / 'frame.png')
        assert save_frame(scene.frame, 320, 240, path) == path
        with Image.open(path) as image:
            assert image.getpixel((0, 0)) == BACKGROUND_COLOR + (255,)
