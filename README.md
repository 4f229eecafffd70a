# ps2kit

A library for working with PlayStation 2 save data:

- **ICN icons** (`ps2kit.icn`): the 3D icons shown in the memory card browser.
  Parse the geometry, animation and texture, write them back, and export the
  model as Wavefront OBJ or the texture as PNG.
- **icon.sys** (`ps2kit.icon_sys`): the metadata file that holds a save's
  title, its colours and lighting, and the names of its icons.
- **Save folders** (`ps2kit.files`): list the files of a folder and work out
  how large a PSU archive holding them would be.
- **Editable documents** (`ps2kit.documents`): open text configuration files,
  icon.sys files and ICN icons for editing and save them back.
- **OBJ import** (`ps2kit.obj_import`): build a plain white ICN icon from a
  Wavefront OBJ mesh.

## Installation

```
pip install ps2kit
```

## Icons

```python
from pathlib import Path
from ps2kit.icn import ICN

icn = ICN.from_bytes(Path("list.icn").read_bytes())
Path("list.obj").write_text(icn.export_obj())
Path("list.png").write_bytes(icn.export_png())
Path("copy.icn").write_bytes(icn.to_bytes())
```

`ICN.from_bytes` raises `ps2kit.icn.ICNFormatError` for bad magic numbers,
bad animation tags or truncated data. Compressed textures (texture type above
`0x07`) are read, but `ICN.to_bytes` cannot write them and raises
`ICNFormatError`. `ps2kit.icn.decompress_texture` expands run-length encoded
texture words on their own.

To turn a mesh into an icon:

```python
from ps2kit.obj_import import create_icn

icn = create_icn("teapot.obj", "teapot.icn")
```

`icn_from_obj(text)` does the same from OBJ text without touching files, and
`parse_obj_triangles(text)` returns the triangles of the single object in the
text, splitting larger faces into fans. Problems in the text raise
`ps2kit.obj_import.OBJFormatError`.

## icon.sys

```python
from pathlib import Path
from ps2kit.icon_sys import IconSys

info = IconSys.from_bytes(Path("icon.sys").read_bytes())
print(info.title, info.icon_file, info.icon_copy_file, info.icon_delete_file)
```

The title is decoded from Shift-JIS and NFKC-normalised
(`ps2kit.icon_sys.parse_sjis_string`). Truncated data raises
`ps2kit.icon_sys.IconSysFormatError`.

## Colours

Texture colours are stored as 16-bit values, five bits per channel plus an
alpha bit. `ps2kit.color.Color.from_u16` and `Color.to_u16` convert between
that form and 8-bit RGBA; `Color.to_rgba` returns the channels as a tuple.

## Save folders

```python
from ps2kit.files import read_folder

files = read_folder("MYSAVE")
for file in files:
    print(file.name, file.size)
print(files.calculated_size())
```

`read_folder` lists the regular files directly inside the folder, sorted by
name. `calculated_size` counts 512 bytes for each of the three directory
entries and for each file header, plus each file's size rounded up to a
1024-byte page (`calc_size`). `Files.add_file(path)` appends another file and
updates the size.

`ps2kit.state.AppState` keeps an opened folder, its `Files` and a queue of
requested actions (`open_file`, `set_title`, `add_files`, `open_folder`,
`open_save`, `export_psu`, `save_file`) that `drain_events` hands back in
order.

## Documents

`ps2kit.documents` wraps a `VirtualFile` for editing:

- `TitleCfgDocument` holds UTF-8 text; `set_contents` marks it modified and
  `save` writes it back. Files that are not valid UTF-8 open with empty
  contents and `encoding_error` set.
- `IconSysDocument` shows the title and icon file names, and `icon_choices`
  lists the `.icn` and `.ico` files of a folder. Its `save` raises
  `DocumentError`: writing icon.sys files is not supported.
- `IcnDocument` loads an icon; `replace_texture` takes a 128x128 image,
  `export_obj` and `export_png` write files, and `save` writes the icon back.

`display_title()` prefixes the title with `* ` while there are unsaved
changes. `generate_wireframe_box(size)` returns line-list coordinates for the
edges of a box centred on the origin.

## What this package does not do

- It does not read or write PSU archives themselves, nor pack a folder into
  one; it only computes the size such an archive would have.
- It has no command-line tool and no graphical interface.
- It cannot write icon.sys files or compressed ICN textures.