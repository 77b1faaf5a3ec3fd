"""
MolText Test Suite

Test modules:
- test_molfile.py: V2000 molblock parsing
- test_layout.py: Grid placement and overlap retries
- test_grid.py: Character grid compositing and glyph selection
- test_drawer.py: End-to-end molblock rendering
- test_structure.py: SMILES -> molblock with RDKit
- test_vector.py: SVG ink normalization and PNG output
- test_name_lookup.py: Name -> SMILES client
- test_rate_limit.py: Per-client rate limiting
- test_api.py: HTTP endpoints
- test_cli.py: Command-line interface

Run all tests:
    pytest tests/ -v

Run specific test file:
    pytest tests/test_drawer.py -v
"""
