import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path so we can import appgift without installing
ROOT = Path(__file__).resolve().parent.parent
if ROOT.as_posix() not in sys.path:
    sys.path.insert(0, ROOT.as_posix())


SAMPLE_GIFT = """\
$CATEGORY: $course$/Quiz

// [id:SA-1] [tag:geo]
::Q1::Capital of France {=Paris#Yes =%50%paris}

::Q2::2+2? {=4#Right ~%-50%3#No ~5 ####Basic sums}

::Q3::Sky blue? {T#Look again#Correct}

::Q4::Pi? {#=3.14159:0.00001#Close =%50%3..3.3 ~#Try again}

::Q5::Match {=cat -> meow =dog -> woof}

::Q6::Describe it {}

::Q7::[html]<p>Read this</p>

::Q8::Fill the {=gap} here
"""


@pytest.fixture
def sample_gift():
    """One question of every variant, plus a category."""
    return SAMPLE_GIFT
