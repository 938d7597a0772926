import logging
from functools import partial

import gradio as gr

from schema_dictionary.config import LOG_LEVEL, SERVER_HOST, SERVER_PORT
from schema_dictionary.columns import default_columns
from schema_dictionary.handlers import (
    export_csv_handler,
    move_column_handler,
    process_schema_files,
    reset_order_handler,
    search_handler,
    select_all_handler,
    select_default_handler,
    select_none_handler,
    update_columns_handler,
)
from schema_dictionary.rendering import TABLE_CSS

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# --- UI Definition ---
with gr.Blocks(title="Schema Data Dictionary", css=TABLE_CSS) as demo:
    gr.Markdown("# Schema Data Dictionary")
    gr.Markdown(
        "Upload the JSON Schema files that describe a dataset. One of them should be an "
        "`array` schema whose `items` describe a row; referenced schemas can be uploaded alongside it."
    )

    # State
    result_state = gr.State()
    columns_state = gr.State(value=default_columns())

    with gr.Row():
        # Left Panel: Input & Columns
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            files_input = gr.File(label="Upload JSON Schema Files", file_types=[".json"], file_count="multiple")
            process_btn = gr.Button("Process Schemas", variant="primary")
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### 2. Customize Table Columns")
            with gr.Row():
                select_all_btn = gr.Button("Select All", size="sm")
                select_none_btn = gr.Button("Select None", size="sm")
                select_default_btn = gr.Button("Default", size="sm")
                reset_order_btn = gr.Button("Reset Order", size="sm")
            column_selector = gr.CheckboxGroup(
                label=f"{len(default_columns())} columns selected",
                choices=[],
                value=default_columns(),
                interactive=True,
                info="Columns are sorted by how many properties use the keyword.",
            )

            gr.Markdown("### 3. Column Order")
            move_selector = gr.Dropdown(label="Column", choices=default_columns(), value="name", interactive=True)
            with gr.Row():
                move_left_btn = gr.Button("Move Left", size="sm")
                move_right_btn = gr.Button("Move Right", size="sm")

            gr.Markdown("### 4. Export")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="data_dictionary.csv")
            export_btn = gr.Button("Export CSV")
            download_output = gr.File(label="Download Result")

        # Right Panel: Table
        with gr.Column(scale=3):
            search_input = gr.Textbox(label="Search variables", placeholder="Search variables...")
            table_output = gr.HTML()

    column_outputs = [columns_state, column_selector, move_selector, table_output]

    process_btn.click(
        fn=process_schema_files,
        inputs=[files_input, search_input],
        outputs=[result_state, *column_outputs, status_msg],
    )

    column_selector.input(
        fn=update_columns_handler,
        inputs=[result_state, columns_state, column_selector, search_input],
        outputs=column_outputs,
    )

    for button, handler in (
        (select_all_btn, select_all_handler),
        (select_none_btn, select_none_handler),
        (select_default_btn, select_default_handler),
        (reset_order_btn, reset_order_handler),
    ):
        button.click(fn=handler, inputs=[result_state, columns_state, search_input], outputs=column_outputs)

    for button, offset in ((move_left_btn, -1), (move_right_btn, 1)):
        button.click(
            fn=partial(move_column_handler, offset=offset),
            inputs=[result_state, columns_state, move_selector, search_input],
            outputs=column_outputs,
        )

    search_input.change(
        fn=search_handler,
        inputs=[result_state, columns_state, search_input],
        outputs=[table_output],
    )

    export_btn.click(
        fn=export_csv_handler,
        inputs=[result_state, columns_state, output_filename],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    demo.launch(server_name=SERVER_HOST, server_port=SERVER_PORT)
