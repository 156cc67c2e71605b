#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest
import pathlib


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def source_tree(tmp_path: pathlib.Path) -> pathlib.Path:
    """
    Create a small source tree:

        folder-one/
            Main.java
            notes.txt
            README
            pkg/
                Helper.java
                Upper.JAVA
                deep/
                    data.json
    """
    root = tmp_path / "folder-one"
    deep = root / "pkg" / "deep"
    deep.mkdir(parents=True)
    (root / "Main.java").write_text("class Main {}")
    (root / "notes.txt").write_text("notes")
    (root / "README").write_text("readme")
    (root / "pkg" / "Helper.java").write_text("class Helper {}")
    (root / "pkg" / "Upper.JAVA").write_text("class Upper {}")
    (deep / "data.json").write_text("{}")
    return root
