from __future__ import annotations

import html
import json
import random
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from basetracker.config import settings
from basetracker.core.models import FrameRecord, TransactionView
from basetracker.io.schemas import frame_to_dict, view_to_dict
from basetracker.io.share import build_share_text

CONFETTI_COLORS = ("#0052ff", "#00cfff", "#ff0055", "#ffcc00", "#00ff99")


@dataclass(frozen=True)
class ConfettiPiece:
    color: str
    left_pct: float
    delay_sec: float
    size_px: float
    duration_sec: float


def confetti_pieces(count: int = 150, seed: Optional[int] = None) -> List[ConfettiPiece]:
    rng = random.Random(seed)
    return [
        ConfettiPiece(
            color=rng.choice(CONFETTI_COLORS),
            left_pct=rng.random() * 100,
            delay_sec=rng.random() * 5,
            size_px=rng.random() * 10 + 5,
            duration_sec=rng.random() * 3 + 2,
        )
        for _ in range(count)
    ]


def write_result_json(view: TransactionView, out_dir: str, address: str = "", filename: str = "result.json") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(view_to_dict(view, address), f, indent=2)

    return str(out_path)


def write_frame_json(frame: FrameRecord, out_dir: str, filename: str = "frame.json") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(frame_to_dict(frame), f, indent=2)

    return str(out_path)


def write_frame_html(metadata: str, out_dir: str, filename: str = "frame.html") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    doc = (
        "<!doctype html>\n<html lang=\"en\">\n<head>\n"
        "  <meta charset=\"utf-8\" />\n"
        + "".join(f"  {line}\n" for line in metadata.strip().splitlines())
        + "</head>\n<body></body>\n</html>\n"
    )
    with out_path.open("w", encoding="utf-8") as f:
        f.write(doc)

    return str(out_path)


def write_result_html(
    view: TransactionView,
    out_dir: str,
    address: str = "",
    filename: str = "index.html",
    confetti_seed: Optional[int] = None,
    network: str = settings.NETWORK_NAME,
) -> str:
    """
    Result card with the share sentence and a one-shot confetti burst.
    """
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    esc = html.escape

    pieces = "\n".join(
        f'    <div class="confetti" style="left: {c.left_pct:.2f}%; background-color: {c.color}; '
        f'width: {c.size_px:.1f}px; height: {c.size_px:.1f}px; '
        f'animation-delay: {c.delay_sec:.2f}s; animation-duration: {c.duration_sec:.2f}s;"></div>'
        for c in confetti_pieces(seed=confetti_seed)
    )
    simulated_note = (
        '\n      <p class="note">No indexed transfers were available; this date is an estimate.</p>'
        if view.simulated else ""
    )

    doc = f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{esc(network)} First Transaction Tracker</title>
  <style>
    :root {{
      --bg: #0f1115;
      --panel: #151824;
      --text: #e6e8ef;
      --muted: #9aa3b2;
      --accent: #0052ff;
    }}
    body {{
      margin: 0;
      font-family: "SF Mono", "Menlo", "Consolas", monospace;
      background: radial-gradient(circle at 20% 20%, #1b2130 0%, #0f1115 60%);
      color: var(--text);
      overflow-x: hidden;
    }}
    header {{
      padding: 16px 20px;
      border-bottom: 1px solid #23283a;
      background: var(--panel);
    }}
    header h1 {{ margin: 0; font-size: 18px; letter-spacing: 0.5px; }}
    header p {{ margin: 6px 0 0 0; font-size: 12px; color: var(--muted); }}
    .result {{
      max-width: 560px;
      margin: 32px auto;
      padding: 20px;
      background: var(--panel);
      border: 1px solid #23283a;
      border-radius: 8px;
    }}
    .result h2 {{ margin-top: 0; color: var(--accent); }}
    .info-item {{ font-size: 13px; margin-bottom: 8px; }}
    .info-label {{ color: var(--muted); }}
    .share {{ font-size: 13px; padding: 10px; background: #0b0d12; border-radius: 4px; }}
    .note {{ font-size: 12px; color: var(--muted); }}
    .confetti-container {{
      position: fixed;
      inset: 0;
      pointer-events: none;
      overflow: hidden;
    }}
    .confetti {{
      position: absolute;
      top: -20px;
      opacity: 0;
      animation-name: fall;
      animation-timing-function: linear;
      animation-iteration-count: 1;
    }}
    @keyframes fall {{
      0% {{ transform: translateY(0) rotate(0deg); opacity: 1; }}
      100% {{ transform: translateY(110vh) rotate(720deg); opacity: 0; }}
    }}
  </style>
</head>
<body>
  <header>
    <h1>{esc(network)} First Transaction Tracker</h1>
    <p>{esc(address)}</p>
  </header>
  <div class="result">
    <h2>Your {esc(network)} Genesis Moment!</h2>
    <div class="info-item"><span class="info-label">First Transaction Date:</span> {esc(view.formatted_date)}</div>
    <div class="info-item"><span class="info-label">Transaction Hash:</span> {esc(view.short_hash)}</div>
    <div class="info-item"><span class="info-label">Block Number:</span> {view.block_number:,}</div>
    <div class="info-item"><span class="info-label">Days Since First Tx:</span> {view.days_since} days</div>
    <div class="info-item"><span class="info-label">Milestone:</span> You've been building on {esc(network)} for {view.months} months!</div>
    <p class="share">{esc(build_share_text(view, network))}</p>{simulated_note}
  </div>
  <div class="confetti-container">
{pieces}
  </div>
</body>
</html>
"""

    with out_path.open("w", encoding="utf-8") as f:
        f.write(doc)

    return str(out_path)
