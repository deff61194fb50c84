import sys
from pathlib import Path

# Adiciona o diretório src ao path para que os imports funcionem
# sem necessidade de instalar o pacote.
project_root = Path(__file__).parent
src_path = project_root / "src"

if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))
