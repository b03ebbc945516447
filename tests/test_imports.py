"""Smoke tests to verify package imports work."""

def test_package_imports():
    """Test that all main classes can be imported."""
    from trochia import OrbitalElements, System, Satellite, Simulation, Trail
    assert OrbitalElements is not None
    assert System is not None
    assert Satellite is not None
    assert Simulation is not None
    assert Trail is not None

def test_version_exists():
    """Test that version is defined."""
    import trochia
    assert hasattr(trochia, '__version__')
    assert trochia.__version__ == "0.1.0"

def test_abbreviations():
    """Short aliases point at the full classes."""
    from trochia import OE, Sat, OrbitalElements, Satellite
    assert OE is OrbitalElements
    assert Sat is Satellite

def test_all_names_resolve():
    """Every name in __all__ is importable."""
    import trochia
    for name in trochia.__all__:
        assert hasattr(trochia, name), name

def test_can_create_orbital_elements():
    """Test basic OrbitalElements creation."""
    from trochia import OrbitalElements
    oe = OrbitalElements(7000000.0, 0.01, 0.1, 0, 0, 0)
    assert oe.a == 7000000.0

def test_can_create_system():
    """Test basic System creation."""
    from trochia import System, EARTH
    sys = System(EARTH)
    assert sys.primary_body.mu == EARTH.G * EARTH.mass
    assert sys.perturbations == ()

def test_can_create_satellite():
    """Test basic Satellite creation."""
    from trochia import Satellite
    sat = Satellite(7000000.0, 0.1, 0, 0, 0, 0)
    assert sat.elements.a == 7000000.0
