import pytest

from lockstep.core import *
from lockstep.modules import *

from tests.modules.constraints import constraint


@pytest.fixture
def tld_file(tmp_path):
    path = tmp_path / "tlds.txt"
    path.write_text("# Version 2016070700, Last Updated Thu Jul  7 07:07:01 2016 UTC\nCOM\nORG\n\nXN--P1AI\n")
    return path
