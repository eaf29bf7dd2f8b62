import csv, math, random
from pathlib import Path
import typer

app = typer.Typer(add_completion=False)

@app.command()
def main(
    out: Path = typer.Option(..., help='CSV output path'),
    count: int = typer.Option(200, help='Number of wells'),
    seed: int = typer.Option(42, help='Random seed'),
):
    random.seed(seed)
    cx, cy = -97.74, 30.27  # central Texas
    wells = []
    for _ in range(count):
        dx = (random.random() - 0.5) * 0.01
        dy = (random.random() - 0.5) * 0.01
        r = math.sqrt((dx*111_000)**2 + (dy*111_000)**2)  # meters approx
        ele = 150 + 12*math.sin(r/180) + random.random()*0.5
        wells.append((cx + dx, cy + dy, round(ele, 3)))
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open('w', newline='', encoding='utf-8') as f:
        w = csv.writer(f); w.writerow(['Longitude', 'Latitude', 'SurfaceEle']); w.writerows(wells)
    print(f'Wrote {len(wells)} wells to {out}')

if __name__ == '__main__':
    app()
