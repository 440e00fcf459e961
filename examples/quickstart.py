"""Quickstart example for speakinline.

This example extracts keys from a small application into translation
assets, edits one translation, and inlines the result into a bundle chunk.

Note: Examples print the run report counters for brevity. In production,
log the full report with RunReport.log_diagnostics().
"""

import json
import tempfile
from pathlib import Path

from speakinline import ExtractOptions, InlineOptions, InlinePlugin, extract, transpile_params

SOURCE = """\
import { $translate as t } from 'qwik-speak';

export const Home = () => (
  <>
    <h1>{t('app.title@@Welcome')}</h1>
    <p>{t('home.greeting@@Hi! I am {{name}}', { name: user.name })}</p>
    <p>{t(props.key)}</p>
  </>
);
"""

with tempfile.TemporaryDirectory() as tmp:
    root = Path(tmp)
    (root / "src").mkdir()
    (root / "src" / "home.tsx").write_text(SOURCE, encoding="utf-8")

    # Example 1: Extraction
    print("=" * 50)
    print("Example 1: Extract Keys")
    print("=" * 50)

    result = extract(ExtractOptions(supported_langs=["en-US", "it-IT"], base_path=tmp))
    for path in result.written:
        print(path.relative_to(root))
    print(f"keys: {result.report.keys}, dynamic: {result.report.dynamic}")
    # Output:
    # public/i18n/en-US/app.json
    # public/i18n/en-US/home.json
    # public/i18n/it-IT/app.json
    # public/i18n/it-IT/home.json
    # keys: 2, dynamic: 1

    # Translate one asset by hand
    it_app = root / "public/i18n/it-IT/app.json"
    it_app.write_text(json.dumps({"app": {"title": "Benvenuto"}}), encoding="utf-8")

    # Example 2: Inlining
    print("\n" + "=" * 50)
    print("Example 2: Inline a Chunk")
    print("=" * 50)

    plugin = InlinePlugin(InlineOptions(["it-IT", "en-US"], "en-US", base_path=tmp))
    plugin.build_start()
    print(plugin.render_chunk("const title = $translate('app.title');", "entry.js"))
    # Output: const title = $lang === 'it-IT' && `Benvenuto` || `Welcome`;
    print(plugin.render_chunk("const n = $translate(key);", "q-1.js"))
    # Output: None
    report = plugin.close_bundle()
    print(f"inlined: {report.inlined}, dynamic: {report.dynamic}")
    # Output: inlined: 1, dynamic: 1

# Example 3: Runtime-style parameter substitution
print("\n" + "=" * 50)
print("Example 3: Transpile Params")
print("=" * 50)

print(transpile_params("Hi! I am {{ name }}", {"name": "Qwik Speak"}))
# Output: Hi! I am Qwik Speak
