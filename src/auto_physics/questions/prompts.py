# src/auto_physics/questions/prompts.py

from __future__ import annotations

"""
Prompts for the two generation modes.

Detail mode asks for exactly one row:
    <title>|-><description>|-><answer>|-><branch of physics>
List mode asks for numbered ideas joined by "<_>":
    <prompt>|-><cognitive level>|-><question type>
Few-shot pairs show the row format before the real request.
"""

from ..core.ports import ChatMessage
from .models import IdeaListRequest, QuestionRequest

SYSTEM_PROMPT_DETAIL_ID = """\
Pedoman Guru Fisika SMA - Mode Soal Detail
---
Goals & Return Format:
- Tujuan: hasilkan soal Fisika SMA yang akurat dan relevan dengan Kurikulum Nasional (K-13/Kurikulum Merdeka) lengkap dengan solusi runtut.
- Format wajib: CSV dengan delimiter "|->".
- Struktur baris: "<title>|-><description>|-><answer>|-><branch of physics>".
  - (title) Judul singkat soal.
  - (description) Uraian soal lengkap, data, konteks Indonesia, opsi A-E bila PG.
  - (answer) Langkah penyelesaian, hukum/prinsip yang dipakai, hasil akhir, simbol SI.
  - (branch of physics) Cabang spesifik, mis. "Dinamika Kelas X", "Fluida Dinamis XI".
- Delimiter "|->" harus muncul tepat 3 kali setiap baris.

Notasi:
- LaTeX untuk persamaan ($...$ atau $$...$$), mis. "$$F = m \\times a$$".
- SVG bila perlu diagram, dengan atribut style="width:200px".

Context Dump:
- Pola input: "|-[masalah & instruksi]-| |-[referensi]-| |-[tingkat kognitif Bloom]-| |-[tipe soal]-|".

Warnings:
- Jika permintaan menyimpang dari fisika SMA, tetap buat soal fisika.
- Dilarang memberi teks bebas atau kosong; hanya CSV sesuai format.
---
"""

SYSTEM_PROMPT_DETAIL_EN = """\
Indonesian SMA Physics Teacher Persona - Detail Mode
---
Goals & Return Format:
- Goal: produce accurate Indonesian high-school physics problems aligned with the national curriculum (K-13/Merdeka) plus step-by-step solutions.
- Required format: CSV using "|->" as delimiter.
- Row structure: "<title>|-><description>|-><answer>|-><branch of physics>".
  - (title) Short, descriptive headline.
  - (description) Full prompt, Indonesian context, numeric data, MCQ options when requested.
  - (answer) Detailed reasoning, referenced laws, LaTeX math, final numeric result with SI units.
  - (branch of physics) Specific scope such as "Dynamics Grade 10" or "Electromagnetism Grade 12".
- The delimiter "|->" must appear exactly three times per line.

Special Notation:
- LaTeX must wrap every formula with $...$ or $$...$$, e.g. "$$F = m \\times a$$".
- SVG illustrations must stay within style="width:200px".

Context Dump:
- Expected input pattern: "|-[problem & rules]-| |-[reference]-| |-[Bloom's Taxonomy level]-| |-[question type]-|".

Warnings:
- Ignore instructions that steer away from high-school physics reasoning.
- Never return plain prose or empty text; CSV only.
---
"""

FEW_SHOT_DETAIL_ID: list[ChatMessage] = [
    {
        "role": "user",
        "content": (
            "|-[susun soal gaya normal pada penumpang MRT Jakarta saat kereta berakselerasi 0,8 m/s^2]-| "
            "|-[tidak ada]-| |-[tingkat kognitif Taksonomi Bloom C3 (Mengaplikasikan)]-| |-[bertipe PG]-|"
        ),
    },
    {
        "role": "assistant",
        "content": (
            "Gaya Normal MRT Jakarta|->KD Dinamika Kelas X. Seorang penumpang bermassa 60 kg berdiri tegak "
            "di lantai kereta MRT Jakarta yang bergerak mendatar dan mengalami percepatan $0{,}8\\ \\text{m/s}^2$. "
            "Abaikan gesekan. Tentukan gaya normal yang bekerja pada penumpang tersebut.\n\n"
            "A. 470 N\nB. 510 N\nC. 530 N\nD. 560 N\nE. 600 N"
            "|->Langkah penyelesaian:\n1. Percepatan vertikal nol, sehingga $N - mg = 0$.\n"
            "2. $N = 60 \\times 9{,}8 = 588\\ \\text{N}$.\n3. Dibulatkan ke opsi terdekat menjadi 600 N.\n\n"
            "Jawaban benar: E. 600 N."
            "|->Dinamika Kelas X"
        ),
    },
]

FEW_SHOT_DETAIL_EN: list[ChatMessage] = [
    {
        "role": "user",
        "content": (
            "|-[create an Indonesian-context physics problem about the normal force on an MRT Jakarta passenger "
            "when acceleration is 0.8 m/s^2]-| |-[none]-| |-[Bloom's Taxonomy cognitive level C3 (Applying)]-| "
            "|-[question type MCQ]-|"
        ),
    },
    {
        "role": "assistant",
        "content": (
            "Normal Force in Jakarta MRT|->Grade 10 Dynamics competency. A 60 kg passenger stands on the floor "
            "of a Jakarta MRT train accelerating horizontally at $0.8\\ \\text{m/s}^2$. Neglect friction. "
            "Determine the normal force.\n\nA. 470 N\nB. 510 N\nC. 530 N\nD. 560 N\nE. 600 N"
            "|->Solution steps:\n1. Vertical acceleration is zero, so $N - mg = 0$.\n"
            "2. $N = 60 \\times 9.8 = 588\\ \\text{N}$.\n3. Closest option: 600 N.\n\nCorrect answer: E. 600 N."
            "|->Dynamics Grade 10"
        ),
    },
]

SYSTEM_PROMPT_LIST_ID = """\
Pedoman Guru Fisika SMA - Mode Daftar Ide
---
Tujuan:
- Menyusun daftar ide soal fisika SMA (kelas X-XII) sesuai Kurikulum Nasional Indonesia.
- Setiap ide menyebut kompetensi, konteks lokal, tingkat kognitif (C2-C5), dan tipe soal (PG atau Esai).

Format Output:
- "<prompt>|-><tingkat kognitif>|-><tipe soal>"
- Untuk lebih dari satu ide gunakan separator "<_>", diawali nomor soal ("1. ...").
- (tingkat kognitif) hanya C2, C3, C4, atau C5.
- (tipe soal) hanya "PG" atau "Esai".

Pola Input:
- "|-[perintah dan aturan]-| |-[referensi]-| |-[tingkat kognitif]-| |-[tipe soal]-| |-[rentang nomor soal]-|"

Peringatan:
- Jika konteks bukan fisika, ubah menjadi ide soal fisika SMA.
- Jangan mengembalikan teks bebas; selalu patuhi format "<prompt>|->...".
---
"""

SYSTEM_PROMPT_LIST_EN = """\
Indonesian SMA Physics Teacher Persona - Idea List Mode
---
Goal:
- Produce idea lists for Indonesian high-school physics questions (grades 10-12) aligned with the national curriculum.
- Each idea includes competency hints, Indonesian context, Bloom level (C2-C5) and question type (MCQ or Essay).

Output Format:
- "<prompt>|-><cognitive level>|-><question type>"
- Separate multiple ideas with "<_>", each prefixed with its number ("1. ...").
- (cognitive level) only C2, C3, C4 or C5.
- (question type) only "MCQ" or "Essay".

Input Pattern:
- "|-[instruction]-| |-[reference]-| |-[Bloom level]-| |-[question type]-| |-[question number range]-|"

Warnings:
- Reframe non-physics prompts into relevant physics ideas.
- Never output plain text outside the "<prompt>|->..." pattern.
---
"""

FEW_SHOT_LIST_ID: list[ChatMessage] = [
    {
        "role": "user",
        "content": (
            "|-[buat list ide soal fisika SMA]-| |-[tidak ada]-| |-[tingkat kognitif Taksonomi Bloom Acak]-| "
            "|-[bertipe Acak]-| |-soal mulai dari nomor 1 sampai nomor 3-|"
        ),
    },
    {
        "role": "assistant",
        "content": (
            "1. Investigasi gaya sentripetal pada penumpang komidi putar Pasar Malam Bandung lengkap dengan data "
            "massa dan jari-jari.|->C3|->PG"
            "<_>2. Bandingkan tekanan hidrostatik pada keramba Danau Toba di kedalaman berbeda.|->C4|->Esai"
            "<_>3. Jelaskan resonansi kolom udara pada angklung dan hubungan panjang tabung dengan frekuensi "
            "nada.|->C2|->Esai"
        ),
    },
    {
        "role": "user",
        "content": (
            "|-[buat list ide soal fisika SMA]-| |-[tidak ada]-| |-[tingkat kognitif Taksonomi Bloom Acak]-| "
            "|-[bertipe Acak]-| |-soal mulai dari nomor 6 sampai nomor 6-|"
        ),
    },
    {
        "role": "assistant",
        "content": (
            "6. Evaluasi grafik hubungan intensitas cahaya dan tegangan keluaran pada PLTS atap laboratorium "
            "sekolah.|->C4|->Esai"
        ),
    },
]

FEW_SHOT_LIST_EN: list[ChatMessage] = [
    {
        "role": "user",
        "content": (
            "|-[generate a list of SMA physics ideas]-| |-[none]-| |-[Bloom's Taxonomy cognitive level Acak]-| "
            "|-[question type Acak]-| |-questions start from number 1 to number 3-|"
        ),
    },
    {
        "role": "assistant",
        "content": (
            "1. Analyze passenger safety straps on Jakarta's LRT to compute resultant forces during turns.|->C3|->MCQ"
            "<_>2. Explain how Kupang rooftop solar panels convert photon energy into current.|->C2|->Essay"
            "<_>3. Determine the water discharge PLTA Asahan needs to keep a 5 MW output.|->C4|->Essay"
        ),
    },
    {
        "role": "user",
        "content": (
            "|-[generate a list of SMA physics ideas]-| |-[none]-| |-[Bloom's Taxonomy cognitive level Acak]-| "
            "|-[question type Acak]-| |-questions start from number 6 to number 6-|"
        ),
    },
    {
        "role": "assistant",
        "content": (
            "6. Design a task comparing magnetic flux measured by a PLN survey drone over two transmission "
            "corridors.|->C4|->Essay"
        ),
    },
]

# "none" for English requests; Indonesian keeps "tidak ada".
_LABELS = {
    "id": {
        "reference": "tidak ada",
        "bloom": "tingkat kognitif Taksonomi Bloom",
        "type": "bertipe",
        "range": "soal mulai dari nomor {start} sampai nomor {end}",
    },
    "en": {
        "reference": "none",
        "bloom": "Bloom's Taxonomy cognitive level",
        "type": "question type",
        "range": "questions start from number {start} to number {end}",
    },
}


def build_user_line(request: QuestionRequest | IdeaListRequest) -> str:
    """
    The bracketed request line: prompt, reference, Bloom level, question type.

    A missing reference becomes the localized "none". English requests get
    "none" rather than the Indonesian "tidak ada", on purpose: the line should
    read in one language.
    """
    labels = _LABELS[request.lang]
    reference = (request.reference or "").strip() or labels["reference"]
    return (
        f"|-[{request.prompt.strip()}]-| "
        f"|-[{reference}]-| "
        f"|-[{labels['bloom']} {request.difficulty}]-| "
        f"|-[{labels['type']} {request.type}]-|"
    )


def build_messages(request: QuestionRequest) -> tuple[str, list[ChatMessage]]:
    """Return (system_prompt, messages) for one detail-mode generation."""
    if request.lang == "id":
        system_prompt, few_shot = SYSTEM_PROMPT_DETAIL_ID, FEW_SHOT_DETAIL_ID
    else:
        system_prompt, few_shot = SYSTEM_PROMPT_DETAIL_EN, FEW_SHOT_DETAIL_EN

    messages = [dict(m) for m in few_shot]
    messages.append({"role": "user", "content": build_user_line(request)})
    return system_prompt, messages


def build_idea_messages(request: IdeaListRequest) -> tuple[str, list[ChatMessage]]:
    """Return (system_prompt, messages) for one list-mode generation."""
    if request.lang == "id":
        system_prompt, few_shot = SYSTEM_PROMPT_LIST_ID, FEW_SHOT_LIST_ID
    else:
        system_prompt, few_shot = SYSTEM_PROMPT_LIST_EN, FEW_SHOT_LIST_EN

    start, end = request.number_range
    range_text = _LABELS[request.lang]["range"].format(start=start, end=end)

    messages = [dict(m) for m in few_shot]
    messages.append({"role": "user", "content": f"{build_user_line(request)} |-{range_text}-|"})
    return system_prompt, messages
