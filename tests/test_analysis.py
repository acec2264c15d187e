import unittest

from fastapi.testclient import TestClient

from beamline.main import app
from beamline.optics.analysis import bounding_box, capture_radius, detector_readings, hit_detector_ids
from beamline.optics.color import wavelength_to_rgb
from beamline.optics.schema import OpticalComponent, Scene
from beamline.optics.simulate import simulate_scene
from beamline.optics.tracer import RaySegment, calculate_ray_path
from beamline.optics.vec2 import Vec2


def comp(id, type, x=0.0, y=0.0, **kw):
    return OpticalComponent(id=id, type=type, position={"x": x, "y": y}, **kw)


class TestDetectorReadings(unittest.TestCase):
    def test_capture_radius_matches_visual_size(self):
        self.assertAlmostEqual(capture_radius(1.0), 1.5)
        self.assertAlmostEqual(capture_radius(2.0), 3.0)

    def test_segment_ending_near_detector_counts(self):
        det = comp("d", "DETECTOR", 10, 0)
        segs = [
            RaySegment(p1=Vec2(0, 0), p2=Vec2(10, 1.0), intensity=0.4),
            RaySegment(p1=Vec2(0, 0), p2=Vec2(10, 0.5), intensity=0.25),
            RaySegment(p1=Vec2(0, 0), p2=Vec2(10, 1.6), intensity=1.0),
            # Passing through is not a hit: only end points are tested.
            RaySegment(p1=Vec2(10, 0), p2=Vec2(510, 0), intensity=1.0),
        ]
        r = detector_readings(segs, [det])["d"]
        self.assertTrue(r["hit"])
        self.assertEqual(r["ray_count"], 2)
        self.assertAlmostEqual(r["intensity"], 0.65)

    def test_no_segments(self):
        r = detector_readings([], [comp("d", "DETECTOR", 10, 0)])
        self.assertEqual(r, {"d": {"hit": False, "ray_count": 0, "intensity": 0.0}})

    def test_traced_beam_reaches_detector(self):
        scene = [
            comp("e", "EMITTER", 0, 0, rotation=360),
            comp("m", "MIRROR", 10, 0, rotation=45),
            comp("d1", "DETECTOR", 10, -10, rotation=90),
            comp("d2", "DETECTOR", 30, 0),
        ]
        segs = calculate_ray_path(scene)
        self.assertEqual(hit_detector_ids(segs, scene), {"d1"})


class TestBoundingBox(unittest.TestCase):
    def test_empty_scene(self):
        self.assertEqual(bounding_box([]), {"min_x": 0.0, "min_y": 0.0, "max_x": 10.0, "max_y": 10.0})

    def test_padded_by_size(self):
        box = bounding_box([comp("a", "MIRROR", 5, 5), comp("b", "DETECTOR", 20, -3, size=2.0)])
        self.assertEqual(box, {"min_x": 3.0, "min_y": -7.0, "max_x": 24.0, "max_y": 7.0})


class TestColor(unittest.TestCase):
    def test_primary_bands(self):
        self.assertEqual(wavelength_to_rgb(650), "rgb(255, 0, 0)")
        self.assertEqual(wavelength_to_rgb(510), "rgb(0, 255, 0)")
        self.assertEqual(wavelength_to_rgb(440), "rgb(0, 0, 255)")

    def test_invisible_is_black(self):
        self.assertEqual(wavelength_to_rgb(300), "rgb(0, 0, 0)")
        self.assertEqual(wavelength_to_rgb(900), "rgb(0, 0, 0)")


class TestSimulate(unittest.TestCase):
    def test_simulate_scene_payload(self):
        scene = Scene(
            components=[
                {"id": "e", "type": "LASER", "position": {"x": 0, "y": 0}, "rotation": 0, "wavelength": 650, "power": 5},
                {"id": "d", "type": "DETECTOR", "position": {"x": 10, "y": 0}},
            ]
        )
        out = simulate_scene(scene)
        self.assertEqual(len(out["segments"]), 1)
        self.assertAlmostEqual(out["segments"][0]["p2"]["x"], 10.0)
        self.assertEqual(out["segments"][0]["intensity"], 1.0)
        self.assertTrue(out["detectors"]["d"]["hit"])
        self.assertEqual(out["emitters"], [{"id": "e", "power": 5.0, "wavelength": 650.0, "color": "rgb(255, 0, 0)"}])


class TestApi(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def test_trace_endpoint(self):
        resp = self.client.post(
            "/api/trace",
            json={
                "components": [
                    {"id": "e", "type": "EMITTER", "position": {"x": 0, "y": 0}, "rotation": 360},
                    {"id": "s", "type": "BEAM_SPLITTER", "position": {"x": 10, "y": 0}, "reflectivity": 0.5, "transmissivity": 0.5},
                ],
                "settings": {"max_bounces": 30},
            },
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(len(body["segments"]), 3)
        self.assertEqual(body["detectors"], {})

    def test_invalid_component_is_422(self):
        resp = self.client.post(
            "/api/trace",
            json={"components": [{"id": "m", "type": "MIRROR", "position": {"x": 0, "y": 0}, "size": 0}]},
        )
        self.assertEqual(resp.status_code, 422)


if __name__ == "__main__":
    unittest.main()
