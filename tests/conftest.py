"""
Shared fixtures: a small SF-mmCIF file with a merged and an unmerged block.
"""

import pytest

SF_CIF = """\
data_r1abcsf
_cell.entry_id 1abc
_cell.length_a 40.0
_cell.length_b 50.0
_cell.length_c 60.0
_cell.angle_alpha 90.0
_cell.angle_beta 90.0
_cell.angle_gamma 90.0
_symmetry.entry_id 1abc
_symmetry.space_group_name_H-M 'P 21 21 21'
_diffrn_radiation_wavelength.id 1
_diffrn_radiation_wavelength.wavelength 0.9792
loop_
_refln.crystal_id
_refln.wavelength_id
_refln.scale_group_code
_refln.index_h
_refln.index_k
_refln.index_l
_refln.status
_refln.F_meas_au
_refln.F_meas_sigma_au
1 1 1 0 0 2 o 120.5 3.2
1 1 1 0 0 4 f 80.25 2.1
1 1 1 1 2 3 o ? ?
1 1 1 2 1 1 o 45.0(2) 1.5

data_r1abcBsf
_cell.length_a 40.0
_cell.length_b 50.0
_cell.length_c 60.0
_cell.angle_alpha 90.0
_cell.angle_beta 90.0
_cell.angle_gamma 90.0
_symmetry.space_group_name_H-M 'P 21 21 21'
loop_
_diffrn_refln.diffrn_id
_diffrn_refln.id
_diffrn_refln.index_h
_diffrn_refln.index_k
_diffrn_refln.index_l
_diffrn_refln.intensity_net
_diffrn_refln.intensity_sigma
1 1 -1 0 0 10.5 0.9
1 2 1 2 -3 20.0 1.2
1 3 2 -1 1 15.0 1.0
"""


@pytest.fixture
def sf_cif_text():
    """SF-mmCIF content with two blocks."""
    return SF_CIF


@pytest.fixture
def sf_cif_file(tmp_path):
    """SF-mmCIF file with two blocks."""
    path = tmp_path / "r1abcsf.ent"
    path.write_text(SF_CIF)
    return path
